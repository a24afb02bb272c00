"""
Ядро бота: диагностические тесты.

Содержит:
- questionnaire.py: вопросы, тесты, правила диагноза
- scoring.py: разбор диапазонов баллов
- session.py: прохождение теста одним пользователем
- registry.py: каталог тестов и реестр сессий
- loader.py: загрузка тестов из JSON/YAML
- dispatcher.py: обработка команд и ответов
"""

from .errors import (
    DiagnosticBotError,
    ConfigurationError,
    TestNotFoundError,
    SessionNotFoundError,
    UnansweredQuestionError,
    InvalidAnswerSelection,
    RangeSpecError,
)

from .scoring import ScoreRange, parse_range, score_in_range
from .questionnaire import Question, TestDefinition, UNDETERMINED
from .session import Session, SessionStatus
from .registry import TestCatalog, SessionRegistry
from .loader import load_tests, parse_tests

__all__ = [
    # errors
    'DiagnosticBotError',
    'ConfigurationError',
    'TestNotFoundError',
    'SessionNotFoundError',
    'UnansweredQuestionError',
    'InvalidAnswerSelection',
    'RangeSpecError',
    # scoring
    'ScoreRange',
    'parse_range',
    'score_in_range',
    # model
    'Question',
    'TestDefinition',
    'UNDETERMINED',
    'Session',
    'SessionStatus',
    # registry
    'TestCatalog',
    'SessionRegistry',
    # loader
    'load_tests',
    'parse_tests',
]
