"""
Fallback хендлеры — команды тестов и ответы на вопросы.

Весь текст, не перехваченный commands_router, уходит в Dispatcher.handle_text.
Сообщения без текста игнорируются.
"""

import logging
import traceback

from aiogram import F, Router
from aiogram.types import Message

from locales import t

logger = logging.getLogger(__name__)

fallback_router = Router(name="fallback")


@fallback_router.message(F.text)
async def on_text_message(message: Message):
    """Обработка текста — делегирование в Dispatcher."""
    from handlers import get_dispatcher, send_reply
    dispatcher = get_dispatcher()

    chat_id = message.chat.id
    try:
        reply = await dispatcher.handle_text(chat_id, message.text)
        await send_reply(message, reply)
    except Exception as e:
        logger.error(f"[Fallback] Error handling message from {chat_id}: {e}")
        logger.error(traceback.format_exc())
        await message.answer(t('errors.processing_error'))
