"""
Тексты сообщений бота диагностических тестов.

Один язык (русский). Плейсхолдеры подставляются через str.format.
"""

MESSAGES = {
    # Приветствие и справка
    'welcome': 'Добро пожаловать в медицинский диагностический бот!',
    'commands.title': 'Доступные команды:',
    'commands.test': '/{command} — {name}',
    'commands.tests': '/tests — Список тестов',
    'commands.help': '/help — Показать справку',
    'commands.cancel': '/cancel — Отменить текущий тест',
    'help.title': 'Справка по боту:',
    'help.intro': 'Этот бот позволяет пройти медицинские диагностические тесты.',
    'help.answer_hint': 'Во время прохождения теста просто вводите номер выбранного ответа.',

    # Тесты
    'tests.title': 'Доступные тесты:',
    'tests.item': '/{command} — {name} ({count} вопр.)',
    'tests.empty': 'Нет доступных тестов.',
    'test.unavailable': 'Тест временно недоступен',
    'test.started': '📋 {name}',
    'test.restarted': 'Предыдущий незавершённый тест отменён.',
    'test.no_questions': 'Произошла ошибка: нет вопросов в тесте',

    # Вопросы
    'question.header': 'Вопрос {number} из {total}:',
    'question.option': '{number}. {label}',

    # Ответы
    'answer.no_session': 'У вас нет активного теста. Начните тест с помощью команды /{command}',
    'answer.not_a_number': 'Пожалуйста, введите номер ответа (1, 2, 3 и т.д.)',
    'answer.out_of_range': 'Пожалуйста, введите номер ответа из предложенных (1–{count})',
    'answer.no_question': 'Ошибка: текущий вопрос не найден',

    # Результат
    'result.title': 'Оценка завершена.',
    'result.score': 'Сумма баллов: {score} из {max_score}',
    'result.diagnosis': 'Результат: {diagnosis}',
    'result.next': 'Для нового теста используйте команду /{command}',

    # Отмена
    'cancel.done': 'Текущий тест отменен. Вы можете начать новый тест с помощью команды /{command}',
    'cancel.nothing': 'Нет активного теста для отмены',

    # Ошибки
    'errors.processing_error': 'Произошла ошибка при обработке вашего сообщения',
}


def t(key: str, **kwargs) -> str:
    """Текст сообщения по ключу. Неизвестный ключ возвращается как есть."""
    text = MESSAGES.get(key, key)
    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError):
            return text
    return text
