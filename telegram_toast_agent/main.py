"""Main entry point for the Telegram toast agent."""

import argparse
import logging
import os
import sys

from .config import AppConfig, load_config
from .exceptions import ConfigError, NotificationError, TelegramError
from .models import NotificationRequest
from .telegram_client import fetch_updates
from .toast_notifier import show_notification
from .url_extractor import extract_url

# Configure logging
log_level = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)

NOTIFICATION_TITLE = "New Message"


def run_once(config: AppConfig) -> int:
    """
    Run the agent once.

    Returns:
        Process exit status: 0 when the run completed (with or without a
        toast), 1 when fetching updates or showing the toast failed.
    """
    try:
        updates = fetch_updates(config.telegram.bot_token, config.telegram)
    except TelegramError as e:
        logger.error(f"Error fetching updates: {e}")
        return 1

    if not updates:
        logger.info("No new messages.")
        return 0

    # Relies on getUpdates returning updates oldest first.
    last_update = updates[-1]
    if last_update.message is None:
        logger.info(f"No message in the last update ({last_update.update_id}).")
        return 0

    message = last_update.message
    url = extract_url(message)
    if not url:
        logger.info("No URL found in the last message.")
        return 0

    request = NotificationRequest(
        title=NOTIFICATION_TITLE,
        body=f"You received a new message: {message.text}",
        url=url,
    )
    logger.info(f"Showing notification for message {message.message_id}...")
    try:
        show_notification(request.title, request.body, request.url, config.toast)
    except NotificationError as e:
        logger.error(f"Error showing notification: {e}")
        return 1

    logger.info("Run completed successfully.")
    return 0


def main():
    """Main entry point with command-line argument parsing."""
    parser = argparse.ArgumentParser(
        description=(
            "Show a Windows toast for the link in the latest Telegram bot message. "
            "Reads TELEGRAM_BOT_TOKEN from the environment."
        )
    )
    parser.parse_args()

    try:
        config = load_config()
    except ConfigError as e:
        logger.error(f"Fatal configuration error: {e}")
        sys.exit(1)

    sys.exit(run_once(config))


if __name__ == "__main__":
    main()
