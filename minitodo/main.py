import flet as ft
import logging

import config
from app import create_app
from core import bootstrap
from services.host_bridge import user_from_config
from services.notification_service import TelegramNotifier
from ui.flet_host import FletHostBridge

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


async def main(page: ft.Page) -> None:
    host = FletHostBridge(
        page,
        notifier=TelegramNotifier(config.TELEGRAM_BOT_TOKEN),
        user=user_from_config(),
    )
    ctx = await bootstrap(host=host)
    create_app(page, ctx)


if __name__ == "__main__":
    ft.app(target=main)
