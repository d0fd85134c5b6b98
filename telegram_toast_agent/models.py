"""Data models for Telegram updates and toast requests."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple, Union

from .exceptions import DecodeError

URL_ENTITY_TYPE = "url"


def _require(raw: Dict[str, Any], key: str, kind: type, default: Any = None) -> Any:
    """Read ``key`` from a JSON object, checking its JSON type."""
    value = raw.get(key)
    if value is None:
        if default is None:
            raise DecodeError(f"missing required field {key!r}")
        return default
    # bool is a subclass of int; JSON true/false is never a valid int field here
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise DecodeError(
            f"field {key!r} should be {kind.__name__}, got {type(value).__name__}"
        )
    return value


@dataclass(frozen=True)
class UrlEntity:
    """A ``url`` entity; the only kind that carries a link."""
    offset: int
    length: int
    url: str  # raw stored value, may be empty

    @property
    def type(self) -> str:
        return URL_ENTITY_TYPE


@dataclass(frozen=True)
class TextEntity:
    """Any non-url annotation (bold, mention, text_link, ...)."""
    type: str
    offset: int
    length: int


Entity = Union[UrlEntity, TextEntity]


def entity_from_dict(raw: Dict[str, Any]) -> Entity:
    """Build the matching entity variant from a Telegram ``MessageEntity`` object."""
    if not isinstance(raw, dict):
        raise DecodeError(f"entity should be an object, got {type(raw).__name__}")

    entity_type = _require(raw, "type", str, "")
    offset = _require(raw, "offset", int, 0)
    length = _require(raw, "length", int, 0)

    if entity_type == URL_ENTITY_TYPE:
        return UrlEntity(offset=offset, length=length, url=_require(raw, "url", str, ""))
    return TextEntity(type=entity_type, offset=offset, length=length)


@dataclass(frozen=True)
class Message:
    """Represents a Telegram message."""
    message_id: int
    text: str
    entities: Tuple[Entity, ...] = ()

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Message":
        if not isinstance(raw, dict):
            raise DecodeError(f"message should be an object, got {type(raw).__name__}")

        raw_entities = raw.get("entities") or []
        if not isinstance(raw_entities, list):
            raise DecodeError("field 'entities' should be a list")

        return cls(
            message_id=_require(raw, "message_id", int, 0),
            text=_require(raw, "text", str, ""),
            entities=tuple(entity_from_dict(e) for e in raw_entities),
        )


@dataclass(frozen=True)
class Update:
    """Represents one result of ``getUpdates``."""
    update_id: int
    message: Optional[Message] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Update":
        if not isinstance(raw, dict):
            raise DecodeError(f"update should be an object, got {type(raw).__name__}")

        raw_message = raw.get("message")
        return cls(
            update_id=_require(raw, "update_id", int),
            message=Message.from_dict(raw_message) if raw_message is not None else None,
        )


@dataclass
class NotificationRequest:
    """A toast to display once."""
    title: str
    body: str
    url: str
