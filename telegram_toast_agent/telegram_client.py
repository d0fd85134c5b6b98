"""Telegram Bot API client for fetching pending updates."""

import logging
from typing import List, Optional

import requests

from .config import TelegramConfig
from .exceptions import APIError, DecodeError, NetworkError
from .models import Update

logger = logging.getLogger(__name__)


def _mask_token(text: str, token: str) -> str:
    """Hide the bot token inside URLs and error strings."""
    if not token:
        return text
    return text.replace(token, "***")


def fetch_updates(
    token: str,
    config: Optional[TelegramConfig] = None,
    session: Optional[requests.Session] = None,
) -> List[Update]:
    """
    Fetch pending updates from the Bot API ``getUpdates`` endpoint.

    Args:
        token: Bot token, substituted into the request path unvalidated.
        config: Telegram configuration (base URL and timeout).
        session: Optional requests session to issue the call with.

    Returns:
        Updates in the order the API returned them (oldest first).

    Raises:
        NetworkError: If the HTTP request fails.
        DecodeError: If the body is not a JSON envelope of the expected shape.
        APIError: If the envelope reports ``ok: false``.
    """
    if config is None:
        config = TelegramConfig(bot_token=token)
    http = session or requests

    url = f"{config.api_base_url}/bot{token}/getUpdates"
    logger.info(f"Fetching updates from {_mask_token(url, token)}")

    try:
        response = http.get(url, timeout=config.timeout)
    except requests.RequestException as e:
        raise NetworkError(f"Request to getUpdates failed: {_mask_token(str(e), token)}") from e

    # Rejections come back as an ok=false envelope, so the status code is not checked here.
    try:
        payload = response.json()
    except ValueError as e:
        raise DecodeError(
            f"getUpdates returned a non-JSON body (HTTP {response.status_code})"
        ) from e

    if not isinstance(payload, dict) or not isinstance(payload.get("ok"), bool):
        raise DecodeError("getUpdates response is missing the boolean 'ok' field")

    if not payload["ok"]:
        error_code = payload.get("error_code")
        description = payload.get("description")
        raise APIError(
            f"Failed to get updates: {description or 'no description'}"
            + (f" (error {error_code})" if error_code is not None else ""),
            error_code=error_code,
            description=description,
        )

    result = payload.get("result")
    if not isinstance(result, list):
        raise DecodeError("getUpdates response 'result' should be a list")

    updates = [Update.from_dict(item) for item in result]
    logger.info(f"Received {len(updates)} update(s)")
    return updates
