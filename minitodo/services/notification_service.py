"""Outbound chat notifications through the Telegram Bot API.

Sends one plain message per completed task to the configured chat. With no
bot token configured every call is a no-op, so the app works offline and in
tests without any network access.
"""
import asyncio
import html
import json
import logging
import urllib.error
import urllib.request
from typing import Optional

from config import NOTIFICATION_TIMEOUT_SECONDS, TELEGRAM_API_URL
from i18n import t
from models.entities import Task

logger = logging.getLogger(__name__)


def completion_message(task: Task) -> str:
    """HTML-safe notification text for a completed task."""
    return t("task_completed_notification", text=html.escape(task.text))


class TelegramNotifier:
    """Posts sendMessage requests for a bot token."""

    def __init__(self, bot_token: str, api_url: str = TELEGRAM_API_URL) -> None:
        self._bot_token = bot_token
        self._api_url = api_url.rstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self._bot_token)

    def _send_http(self, chat_id: str, message: str) -> Optional[str]:
        """Send one message. Returns None on success, error string on failure.

        Pure I/O - safe to run in a background thread.
        """
        payload = json.dumps({
            "chat_id": chat_id,
            "text": message,
            "parse_mode": "HTML",
        }).encode("utf-8")

        req = urllib.request.Request(
            f"{self._api_url}/bot{self._bot_token}/sendMessage",
            data=payload,
            headers={
                "Content-Type": "application/json",
                "User-Agent": "Minitodo/1.0",
            },
            method="POST",
        )

        try:
            with urllib.request.urlopen(req, timeout=NOTIFICATION_TIMEOUT_SECONDS) as response:
                if response.status == 200:
                    return None
                return f"HTTP {response.status}"
        except urllib.error.HTTPError as e:
            body = ""
            try:
                body = e.read().decode("utf-8", errors="replace")[:200]
            except OSError:
                pass
            return f"{e.code} {body}" if body else f"{e.code} {e.reason}"
        except urllib.error.URLError as e:
            return f"Network: {e.reason}"
        except OSError as e:
            # Read timeouts and dropped connections after the request was sent
            return f"Network: {e}"

    async def send(self, chat_id: str, message: str) -> Optional[str]:
        """Send without blocking the event loop. No-op when unconfigured."""
        if not self.is_configured or not chat_id:
            return None
        loop = asyncio.get_running_loop()
        error = await loop.run_in_executor(None, self._send_http, chat_id, message)
        if error is not None:
            logger.warning(f"Notification to {chat_id} failed: {error}")
        return error
