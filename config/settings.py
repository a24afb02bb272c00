"""
Настройки бота: токены, пути, маппинг команд на тесты, логирование.

Все значения читаются из переменных окружения при импорте.
"""

import logging
import os
from pathlib import Path

# ============= ПУТИ =============

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_TESTS_CONFIG = BASE_DIR / "config" / "tests_config.json"

# ============= ТОКЕНЫ =============

BOT_TOKEN = os.getenv("TELEGRAM_BOT_TOKEN")
BOT_USERNAME = os.getenv("BOT_USERNAME", "")

# ============= ТЕСТЫ =============

TESTS_CONFIG_PATH = Path(os.getenv("TESTS_CONFIG_PATH", str(DEFAULT_TESTS_CONFIG)))


def parse_test_commands(raw: str) -> dict[str, str]:
    """Разобрать строку вида "mosftest:MOSF,gcs:Глазго" в {команда: фрагмент имени теста}.

    Порядок сохраняется — в нём команды показываются в /help и /tests.
    Пустые и некорректные элементы пропускаются.
    """
    commands: dict[str, str] = {}
    for item in (raw or "").split(","):
        command, sep, fragment = item.partition(":")
        command = command.strip().lstrip("/")
        fragment = fragment.strip()
        if not sep or not command or not fragment:
            continue
        commands[command] = fragment
    return commands


TEST_COMMANDS = parse_test_commands(os.getenv("TEST_COMMANDS", "mosftest:MOSF"))

# ============= ЛОГИРОВАНИЕ =============

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_logger(name: str) -> logging.Logger:
    """Логгер модуля. Формат и уровень задаются в bot.py через basicConfig."""
    return logging.getLogger(name)


def validate_env() -> list[str]:
    """Список обязательных переменных окружения, которые не заданы."""
    missing = []
    if not BOT_TOKEN:
        missing.append("TELEGRAM_BOT_TOKEN")
    return missing
