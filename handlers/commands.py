"""
Тонкие aiogram хендлеры для служебных команд.

Каждый хендлер: получить chat_id → делегировать в Dispatcher → отправить Reply.
Команды тестов (/mosftest и др.) задаются конфигурацией и обрабатываются в fallback.
"""

import logging
import traceback

from aiogram import Router
from aiogram.filters import Command, CommandStart
from aiogram.types import Message

from locales import t

logger = logging.getLogger(__name__)

commands_router = Router(name="commands")


async def _safe_route(message: Message, route):
    """Обёртка: вызвать Dispatcher → отправить ответ → catch ошибки."""
    from handlers import send_reply
    try:
        reply = await route
        await send_reply(message, reply)
    except Exception as e:
        logger.error(f"[CMD] Routing error for chat_id={message.chat.id}: {e}")
        logger.error(traceback.format_exc())
        await message.answer(t('errors.processing_error'))


@commands_router.message(CommandStart())
async def cmd_start(message: Message):
    """Приветствие и список команд."""
    from handlers import get_dispatcher
    await _safe_route(message, get_dispatcher().start())


@commands_router.message(Command("help"))
async def cmd_help(message: Message):
    """Справка по боту."""
    from handlers import get_dispatcher
    await _safe_route(message, get_dispatcher().help())


@commands_router.message(Command("tests"))
async def cmd_tests(message: Message):
    """Список доступных тестов."""
    from handlers import get_dispatcher
    await _safe_route(message, get_dispatcher().list_tests())


@commands_router.message(Command("cancel"))
async def cmd_cancel(message: Message):
    """Отменить текущий тест."""
    logger.info(f"[CMD] /cancel received from chat_id={message.chat.id}")
    from handlers import get_dispatcher
    await _safe_route(message, get_dispatcher().cancel(message.chat.id))
