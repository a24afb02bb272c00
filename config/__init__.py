"""
Модуль конфигурации бота.

Содержит:
- settings.py: токены, пути, маппинг команд на тесты, логирование
- tests_config.json: определения диагностических тестов
"""

from .settings import (
    # Токены
    BOT_TOKEN,
    BOT_USERNAME,
    validate_env,

    # Тесты
    TESTS_CONFIG_PATH,
    TEST_COMMANDS,
    parse_test_commands,

    # Логирование
    LOG_LEVEL,
    LOG_FORMAT,
    get_logger,

    # Пути
    BASE_DIR,
)

__all__ = [
    'BOT_TOKEN',
    'BOT_USERNAME',
    'validate_env',
    'TESTS_CONFIG_PATH',
    'TEST_COMMANDS',
    'parse_test_commands',
    'LOG_LEVEL',
    'LOG_FORMAT',
    'get_logger',
    'BASE_DIR',
]
