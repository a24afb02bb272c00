"""
Модель диагностического теста: вопросы и правила диагноза.

Question и TestDefinition неизменяемы после создания: один экземпляр
TestDefinition разделяют все сессии без синхронизации.
"""

from dataclasses import dataclass, replace
from typing import Optional

from config import get_logger
from core.errors import InvalidAnswerSelection, RangeSpecError
from core.scoring import parse_range

logger = get_logger(__name__)

# Результат, когда сумма баллов не попала ни в один диапазон
UNDETERMINED = "Не удалось определить диагноз"


@dataclass(frozen=True)
class Question:
    """Вопрос теста.

    Attributes:
        question_text: Текст вопроса для пользователя
        parameter_name: Оцениваемый параметр (например, "renal")
        options: Пары (текст ответа, балл) в порядке показа
    """
    question_text: str
    parameter_name: str
    options: tuple[tuple[str, int], ...] = ()

    @classmethod
    def create(cls, question_text: str, parameter_name: str, answers: Optional[dict] = None) -> "Question":
        """Создать вопрос из словаря {ответ: балл}. Порядок словаря сохраняется.

        Raises:
            ValueError: балл не целое число (float и bool тоже отклоняются)
        """
        options = []
        for label, score in (answers or {}).items():
            if not isinstance(score, int) or isinstance(score, bool):
                raise ValueError(f"score for answer {label!r} must be an integer, got {score!r}")
            options.append((str(label), score))
        return cls(question_text, parameter_name, tuple(options))

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        return cls.create(
            data.get('questionText', ''),
            data.get('parameterName', ''),
            data.get('answers') or {},
        )

    @property
    def answer_options(self) -> dict[str, int]:
        """Копия вариантов ответа {текст: балл}."""
        return dict(self.options)

    @property
    def is_answerable(self) -> bool:
        """Вопрос без вариантов ответа задать нельзя."""
        return bool(self.options)

    def answer_labels(self) -> list[str]:
        """Тексты вариантов ответа в порядке показа."""
        return [label for label, _ in self.options]

    def score_for(self, label: str) -> Optional[int]:
        """Балл за ответ или None, если такого варианта нет."""
        for option, score in self.options:
            if option == label:
                return score
        return None

    def label_at(self, number: int) -> str:
        """Текст варианта по его номеру (с 1)."""
        if not 1 <= number <= len(self.options):
            raise InvalidAnswerSelection(str(number), len(self.options))
        return self.options[number - 1][0]

    @property
    def max_score(self) -> int:
        return max((score for _, score in self.options), default=0)


@dataclass(frozen=True)
class TestDefinition:
    """Диагностический тест: упорядоченные вопросы + правила диагноза.

    Правила проверяются в порядке объявления, побеждает первое совпавшее
    (пересекающиеся диапазоны разрешаются порядком, а не точностью).
    """
    __test__ = False  # не тестовый класс для pytest

    name: str
    questions: tuple[Question, ...] = ()
    rules: tuple[tuple[str, str], ...] = ()
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "TestDefinition":
        rules = data.get('diagnosisRules') or {}
        return cls(
            name=data.get('testName') or data.get('name') or '',
            questions=tuple(Question.from_dict(q) for q in data.get('questions') or []),
            rules=tuple((str(k), str(v)) for k, v in rules.items()),
            description=data.get('description') or '',
        )

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def diagnosis_rules(self) -> dict[str, str]:
        """Копия правил {диапазон: диагноз} в порядке объявления."""
        return dict(self.rules)

    @property
    def max_score(self) -> int:
        """Максимально возможная сумма баллов."""
        return sum(q.max_score for q in self.questions)

    def matches(self, fragment: str) -> bool:
        """Содержит ли имя теста фрагмент (с учётом регистра)."""
        return fragment in self.name

    def with_question(self, question: Question) -> "TestDefinition":
        """Новый тест с вопросом, добавленным в конец."""
        return replace(self, questions=self.questions + (question,))

    def with_diagnosis_rule(self, score_range: str, diagnosis: str) -> "TestDefinition":
        """Новый тест с добавленным правилом.

        Повторный диапазон заменяет диагноз и сохраняет позицию правила.
        """
        rules = dict(self.rules)
        rules[score_range] = diagnosis
        return replace(self, rules=tuple(rules.items()))

    def diagnose(self, total_score: int) -> str:
        """Диагноз первого правила, в диапазон которого попадает сумма.

        Некорректный диапазон не совпадает ни с чем (с предупреждением в логе).
        """
        for score_range, diagnosis in self.rules:
            try:
                if parse_range(score_range).contains(total_score):
                    return diagnosis
            except RangeSpecError:
                logger.warning(f"[Scoring] Test '{self.name}': malformed range {score_range!r} skipped")
        return UNDETERMINED
