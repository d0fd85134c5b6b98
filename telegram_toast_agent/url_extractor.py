"""Link extraction from Telegram message entities."""

from .models import Message, UrlEntity


def extract_url(message: Message) -> str:
    """
    Return the URL of the first ``url`` entity in the message.

    An empty string means the message carries no link. The stored value is
    returned verbatim, without validation.
    """
    for entity in message.entities:
        if isinstance(entity, UrlEntity):
            return entity.url
    return ""
