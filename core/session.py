"""
Сессия прохождения диагностического теста.

Хранит прогресс одного пользователя: позицию следующего вопроса
и баллы по параметрам. Тест разделяется между сессиями и не изменяется.

Состояния: not_started → in_progress → complete.
Переход вперёд выполняет только advance().
"""

from typing import Optional

from config import get_logger
from core.errors import InvalidAnswerSelection, UnansweredQuestionError
from core.questionnaire import Question, TestDefinition

logger = get_logger(__name__)


class SessionStatus:
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class Session:
    """Прогресс пользователя по одному тесту."""

    def __init__(self, test: TestDefinition):
        self.test = test
        # Индекс следующего, ещё не заданного вопроса
        self.cursor = 0
        self._scores: dict[str, int] = {}
        # Курсор, при котором уже принят ответ на текущий вопрос
        self._answered_cursor: Optional[int] = None

    def __repr__(self) -> str:
        return f"<Session: {self.test.name!r} {self.cursor}/{self.total_questions()}>"

    @property
    def status(self) -> str:
        if self.cursor == 0 and self.total_questions() > 0:
            return SessionStatus.NOT_STARTED
        if self.is_complete():
            return SessionStatus.COMPLETE
        return SessionStatus.IN_PROGRESS

    @property
    def collected_scores(self) -> dict[str, int]:
        """Копия баллов {параметр: балл}."""
        return dict(self._scores)

    def advance(self) -> Optional[Question]:
        """Выдать следующий вопрос и сдвинуть курсор.

        Returns:
            Вопрос с индексом, равным курсору до вызова, или None,
            если вопросы закончились (состояние при этом не меняется).
        """
        questions = self.test.questions
        if self.cursor >= len(questions):
            return None
        question = questions[self.cursor]
        self.cursor += 1
        return question

    def current_question(self) -> Optional[Question]:
        """Последний выданный advance() вопрос (без побочных эффектов)."""
        if self.cursor == 0 or self.cursor > self.total_questions():
            return None
        return self.test.questions[self.cursor - 1]

    def record_answer(self, parameter_name: str, score: int) -> None:
        """Записать балл параметра. Повторная запись перезаписывает значение."""
        self._scores[parameter_name] = score

    def answer_current(self, label: str) -> int:
        """Принять ответ на текущий вопрос.

        Returns:
            Балл выбранного варианта

        Raises:
            UnansweredQuestionError: нет заданного вопроса или ответ уже принят
            InvalidAnswerSelection: такого варианта у вопроса нет
        """
        question = self.current_question()
        if question is None or self._answered_cursor == self.cursor:
            raise UnansweredQuestionError(f"No outstanding question (cursor={self.cursor})")

        score = question.score_for(label)
        if score is None:
            raise InvalidAnswerSelection(label, len(question.options))

        self.record_answer(question.parameter_name, score)
        self._answered_cursor = self.cursor
        logger.debug(f"[Session] {question.parameter_name} = {score} ({label!r})")
        return score

    def is_complete(self) -> bool:
        return self.cursor >= self.total_questions()

    def total_score(self) -> int:
        return sum(self._scores.values())

    def final_diagnosis(self) -> str:
        """Диагноз по сумме собранных баллов.

        Вызов до завершения теста допустим: диагноз по частичной сумме.
        """
        return self.test.diagnose(self.total_score())

    def question_number(self) -> int:
        """Номер последнего заданного вопроса (с 1)."""
        return min(self.cursor, self.total_questions())

    def total_questions(self) -> int:
        return self.test.question_count
