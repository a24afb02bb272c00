"""
Регистрация всех aiogram хендлеров.

Все хендлеры — тонкие обёртки, делегирующие логику в core/dispatcher.py.
"""

from aiogram import Dispatcher as AiogramDispatcher
from aiogram.types import Message

from core.dispatcher import Dispatcher as BotDispatcher, Reply
from integrations.telegram.keyboards import kb_answer_numbers, kb_remove

# Module-level reference, set during setup_handlers()
_dispatcher: BotDispatcher = None


def get_dispatcher() -> BotDispatcher:
    """Get the bot dispatcher. Must be called after setup_handlers()."""
    return _dispatcher


async def send_reply(message: Message, reply: Reply) -> Message:
    """Отправить Reply: с номерами ответов на клавиатуре или без клавиатуры."""
    if reply.options:
        markup = kb_answer_numbers(len(reply.options))
    else:
        markup = kb_remove()
    return await message.answer(reply.text, reply_markup=markup)


def setup_handlers(dp: AiogramDispatcher, dispatcher: BotDispatcher) -> None:
    """Подключает роутеры команд.

    Fallback подключается отдельно через setup_fallback() ПОСЛЕ них.

    Args:
        dp: Aiogram Dispatcher
        dispatcher: Наш core.dispatcher.Dispatcher
    """
    global _dispatcher
    _dispatcher = dispatcher

    from .commands import commands_router

    dp.include_router(commands_router)


def setup_fallback(dp: AiogramDispatcher) -> None:
    """Подключает fallback роутер (команды тестов и ответы).

    ДОЛЖЕН вызываться ПОСЛЕ всех остальных роутеров.
    """
    from .fallback import fallback_router
    dp.include_router(fallback_router)
