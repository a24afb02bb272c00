"""
Ошибки ядра диагностических тестов.

ConfigurationError фатальна для запуска бота.
Остальные — ожидаемые ситуации: диспетчер превращает их в ответ пользователю.
"""


class DiagnosticBotError(Exception):
    """Базовое исключение бота."""


class ConfigurationError(DiagnosticBotError):
    """Определения тестов отсутствуют, повреждены или не содержат нужного теста."""


class TestNotFoundError(DiagnosticBotError):
    """Ни одно загруженное имя теста не содержит искомый фрагмент."""

    __test__ = False  # не тестовый класс для pytest

    def __init__(self, fragment: str):
        self.fragment = fragment
        super().__init__(f"Test not found: {fragment!r}")


class SessionNotFoundError(DiagnosticBotError):
    """У пользователя нет активной сессии."""

    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(f"No active session for user {user_id}")


class UnansweredQuestionError(DiagnosticBotError):
    """Ответ пришёл, когда ни один вопрос не ожидает ответа."""


class InvalidAnswerSelection(DiagnosticBotError):
    """Ответ не соответствует ни одному варианту текущего вопроса."""

    def __init__(self, raw: str, options_count: int):
        self.raw = raw
        self.options_count = options_count
        super().__init__(f"Invalid answer {raw!r} (options: {options_count})")


class RangeSpecError(DiagnosticBotError):
    """Диапазон баллов похож на "A-B", "<=X" или ">=Y", но границы не целые числа."""

    def __init__(self, spec: str):
        self.spec = spec
        super().__init__(f"Malformed score range: {spec!r}")
