"""
Загрузка определений тестов из файла.

Поддерживаются JSON (.json) и YAML (.yaml / .yml) в двух формах:
1. Список тестов: [{...}, {...}]
2. Объект с полем tests: {"tests": [...]}

Поля теста:
    testName (или name), description, questions, diagnosisRules

Любая проблема с файлом — ConfigurationError: без тестов бот не стартует.
"""

import json
from pathlib import Path

import yaml

from config import get_logger
from core.errors import ConfigurationError, RangeSpecError
from core.questionnaire import TestDefinition
from core.scoring import parse_range

logger = get_logger(__name__)

YAML_SUFFIXES = ('.yaml', '.yml')


def _read_document(path: Path):
    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(f)
        return json.load(f)


def _extract_tests(document, path: Path) -> list:
    if isinstance(document, list):
        return document
    if isinstance(document, dict) and 'tests' in document:
        tests = document['tests']
        if isinstance(tests, list):
            return tests
        raise ConfigurationError(f"{path}: 'tests' must be a list")
    raise ConfigurationError(f"{path}: expected a list of tests or an object with 'tests'")


def _check_questions(questions: list, where: str) -> None:
    """Текст вопроса — непустая строка, имя параметра — строка."""
    for number, question in enumerate(questions, 1):
        if not isinstance(question, dict):
            raise ConfigurationError(f"{where}: question {number} must be an object")
        text = question.get('questionText')
        if not isinstance(text, str) or not text.strip():
            raise ConfigurationError(f"{where}: question {number} has no questionText")
        if not isinstance(question.get('parameterName', ''), str):
            raise ConfigurationError(f"{where}: question {number}: parameterName must be a string")


def _check_rules(test: TestDefinition) -> None:
    """Предупредить о диапазонах, которые никогда не совпадут."""
    for score_range, _ in test.rules:
        try:
            parse_range(score_range)
        except RangeSpecError:
            logger.warning(f"[Loader] Test '{test.name}': malformed range {score_range!r} will never match")


def parse_tests(document, source: str = "<config>") -> list[TestDefinition]:
    """Построить тесты из уже разобранного документа."""
    path = Path(source)
    tests = []
    for index, raw in enumerate(_extract_tests(document, path)):
        if not isinstance(raw, dict):
            raise ConfigurationError(f"{source}: test #{index + 1} must be an object")
        name = raw.get('testName') or raw.get('name')
        if not name:
            raise ConfigurationError(f"{source}: test #{index + 1} has no testName")
        if not isinstance(name, str):
            raise ConfigurationError(f"{source}: test #{index + 1}: testName must be a string")
        if not isinstance(raw.get('questions') or [], list):
            raise ConfigurationError(f"{source}: test #{index + 1}: 'questions' must be a list")
        _check_questions(raw.get('questions') or [], f"{source}: test {name!r}")
        if not isinstance(raw.get('diagnosisRules') or {}, dict):
            raise ConfigurationError(f"{source}: test #{index + 1}: 'diagnosisRules' must be an object")
        try:
            test = TestDefinition.from_dict(raw)
        except (TypeError, ValueError, AttributeError) as e:
            raise ConfigurationError(f"{source}: test #{index + 1} is malformed: {e}") from e

        for number, question in enumerate(test.questions, 1):
            if not question.is_answerable:
                logger.warning(f"[Loader] Test '{test.name}': question {number} has no answers and will be skipped")
        _check_rules(test)
        tests.append(test)

    if not tests:
        raise ConfigurationError(f"{source}: no tests defined")
    return tests


def load_tests(path: str | Path) -> list[TestDefinition]:
    """Загрузить тесты из файла.

    Raises:
        ConfigurationError: файл не найден, не разбирается или не содержит тестов
    """
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Tests config not found: {path}")

    try:
        document = _read_document(path)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot parse tests config {path}: {e}") from e

    tests = parse_tests(document, str(path))
    logger.info(f"Загружено тестов: {len(tests)} из {path.name}")
    return tests
