"""
pytest конфигурация и общие фикстуры.
"""

import sys
from pathlib import Path

import pytest

# Добавляем корень проекта в path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture
def mosf_test():
    """Тест MOSF из двух вопросов: organA {0,1,3}, organB {0,2}."""
    from core.questionnaire import Question, TestDefinition

    return TestDefinition(
        name="MOSF",
        questions=(
            Question.create("Орган A", "organA", {"none": 0, "mild": 1, "severe": 3}),
            Question.create("Орган B", "organB", {"none": 0, "severe": 2}),
        ),
        rules=(("0-1", "Low risk"), ("2-5", "High risk")),
    )


@pytest.fixture
def catalog(mosf_test):
    from core.questionnaire import Question, TestDefinition
    from core.registry import TestCatalog

    glasgow = TestDefinition(
        name="Шкала комы Глазго",
        questions=(Question.create("Открывание глаз", "eyes", {"нет": 1, "спонтанное": 4}),),
        rules=((">=3", "Ясное сознание"),),
    )
    return TestCatalog([mosf_test, glasgow])


@pytest.fixture
def registry(catalog):
    from core.registry import SessionRegistry
    return SessionRegistry(catalog)
