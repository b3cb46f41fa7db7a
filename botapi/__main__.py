"""Echo bot: ``python -m botapi`` with ``BOT_TOKEN`` set in the environment or ``.env``.

Replies to every text message with the same text; ``/start`` and ``/help``
print a short greeting.
"""

import logging

from botapi.client import BotClient
from botapi.exceptions import APIException
from botapi.helpers import MODE_HTML, escape_text
from botapi.log import configure_logging
from botapi.models import Update

logger = logging.getLogger("botapi.echo")

GREETING = "Send me any text and I will send it back."


def reply_text(update: Update) -> str | None:
    """The reply for *update*, or ``None`` when it deserves none."""
    message = update.message
    if message is None or not message.text:
        return None
    if message.is_command() and message.command() in ("start", "help"):
        return GREETING
    return f"<b>echo:</b> {escape_text(MODE_HTML, message.text)}"


def main() -> None:
    configure_logging(logging.INFO)
    client = BotClient.from_env()
    me = client.get_me()
    logger.info("Authorized", extra={"bot_username": me.username})

    updates = client.get_updates_chan(timeout=30)
    try:
        for update in updates:
            text = reply_text(update)
            if text is None:
                continue
            try:
                client.send_message(update.message.chat.id, text, parse_mode=MODE_HTML)
            except APIException as exc:
                logger.warning("Reply failed", extra={"update_id": update.update_id, "error": str(exc)})
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        client.close()


if __name__ == "__main__":
    main()
