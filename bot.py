"""
Медицинский диагностический бот — Telegram-бот для прохождения
балльных диагностических тестов (шкала полиорганной недостаточности MOSF и др.).

Задаёт вопросы по одному, суммирует баллы выбранных ответов
и выдаёт результат по диапазонам из конфигурации тестов.
"""

import asyncio
import logging
import sys

from aiogram import Bot, Dispatcher
from aiogram.types import BotCommand

from config import (
    BOT_TOKEN, BOT_USERNAME, LOG_FORMAT, LOG_LEVEL,
    TEST_COMMANDS, TESTS_CONFIG_PATH, validate_env,
)
from core.dispatcher import Dispatcher as BotDispatcher
from core.errors import ConfigurationError
from core.loader import load_tests
from core.middleware import LoggingMiddleware
from core.registry import SessionRegistry, TestCatalog

logging.basicConfig(
    level=LOG_LEVEL,
    format=LOG_FORMAT,
    stream=sys.stdout
)
logger = logging.getLogger(__name__)


def build_dispatcher() -> BotDispatcher:
    """Загрузить тесты и собрать диспетчер.

    Raises:
        ConfigurationError: тесты не загружены или команда указывает на отсутствующий тест
    """
    catalog = TestCatalog(load_tests(TESTS_CONFIG_PATH))
    bot_dispatcher = BotDispatcher(SessionRegistry(catalog), TEST_COMMANDS)
    bot_dispatcher.validate()
    return bot_dispatcher


# ============= ЗАПУСК =============

async def main():
    missing = validate_env()
    if missing:
        raise ValueError(f"Не установлены переменные окружения: {', '.join(missing)}")

    try:
        bot_dispatcher = build_dispatcher()
    except ConfigurationError as e:
        logger.error(f"❌ Ошибка загрузки тестов: {e}")
        raise

    bot = Bot(token=BOT_TOKEN)
    dp = Dispatcher()

    dp.message.middleware(LoggingMiddleware())

    # Служебные команды, затем fallback (команды тестов и ответы) — ПОСЛЕДНИМ
    from handlers import setup_handlers, setup_fallback
    setup_handlers(dp, bot_dispatcher)
    setup_fallback(dp)

    commands = [
        BotCommand(command=command, description=bot_dispatcher.registry.catalog.find(fragment).name[:256])
        for command, fragment in TEST_COMMANDS.items()
    ]
    commands += [
        BotCommand(command="tests", description="Список тестов"),
        BotCommand(command="help", description="Справка"),
        BotCommand(command="cancel", description="Отменить текущий тест"),
    ]
    await bot.set_my_commands(commands)

    logger.info(
        f"🚀 Бот {BOT_USERNAME or ''} запущен, тестов: {len(bot_dispatcher.registry.catalog)}, "
        f"команды: {', '.join('/' + c for c in TEST_COMMANDS)}"
    )

    await bot.delete_webhook(drop_pending_updates=False)

    try:
        await dp.start_polling(bot)
    finally:
        await bot.session.close()
        logger.info("🔒 Бот остановлен")


if __name__ == "__main__":
    asyncio.run(main())
