"""
Клавиатуры для Telegram бота диагностических тестов.
"""

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup, ReplyKeyboardRemove

# Кнопок номеров ответа в одной строке
ANSWER_BUTTONS_PER_ROW = 5


def kb_answer_numbers(count: int, per_row: int = ANSWER_BUTTONS_PER_ROW) -> ReplyKeyboardMarkup:
    """Клавиатура с номерами вариантов ответа: 1, 2, 3..."""
    numbers = [str(i) for i in range(1, count + 1)]
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text=n) for n in numbers[i:i + per_row]]
            for i in range(0, len(numbers), per_row)
        ],
        resize_keyboard=True,
        one_time_keyboard=True,
    )


def kb_remove() -> ReplyKeyboardRemove:
    """Убрать клавиатуру ответов."""
    return ReplyKeyboardRemove(remove_keyboard=True)
