"""
Запуск Telegram-бота из корня проекта: python -m bot.run_bot
(модули config и diary импортируются как пакеты, поэтому python bot/run_bot.py не подойдет).
"""

import asyncio
import logging
import sys

from config import Config
from bot.bot_service import main


log = logging.getLogger(__name__)

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, stream=sys.stdout)
    if not Config.TELEGRAM_BOT_TOKEN:
        log.error("TELEGRAM_BOT_TOKEN должен быть установлен в .env")
        sys.exit(1)

    asyncio.run(main())
