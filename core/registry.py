"""
Каталог тестов и реестр сессий.

TestCatalog — загруженные тесты, только чтение.
SessionRegistry — активные сессии (user_id → Session), принадлежит диспетчеру.

Одна сессия на пользователя. Операции над сессией пользователя
выполняются под его блокировкой:

    async with registry.lock(user_id):
        session = registry.require_session(user_id)
        ...
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Hashable, Iterable, Optional

from config import get_logger
from core.errors import SessionNotFoundError, TestNotFoundError
from core.questionnaire import TestDefinition
from core.session import Session

logger = get_logger(__name__)


class TestCatalog:
    """Упорядоченный набор тестов в порядке загрузки."""

    __test__ = False  # не тестовый класс для pytest

    def __init__(self, tests: Iterable[TestDefinition] = ()):
        self._tests: tuple[TestDefinition, ...] = tuple(tests)

    def __len__(self) -> int:
        return len(self._tests)

    def __iter__(self):
        return iter(self._tests)

    def find(self, fragment: str) -> TestDefinition:
        """Первый тест, имя которого содержит фрагмент.

        Raises:
            TestNotFoundError: совпадений нет
        """
        for test in self._tests:
            if test.matches(fragment):
                return test
        raise TestNotFoundError(fragment)


class SessionRegistry:
    """Активные сессии пользователей."""

    def __init__(self, catalog: TestCatalog):
        self.catalog = catalog
        self._sessions: dict[Hashable, Session] = {}
        self._locks: dict[Hashable, asyncio.Lock] = {}
        # user_id → сколько корутин держат или ждут блокировку
        self._lock_users: dict[Hashable, int] = {}

    @property
    def active_count(self) -> int:
        return len(self._sessions)

    @property
    def lock_count(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def lock(self, user_id: Hashable):
        """Исключительный доступ к сессии пользователя.

        Блокировка живёт, пока её кто-то держит или ждёт; последний
        вышедший удаляет её, так что словарь не растёт с числом пользователей.
        """
        user_lock = self._locks.setdefault(user_id, asyncio.Lock())
        self._lock_users[user_id] = self._lock_users.get(user_id, 0) + 1
        try:
            async with user_lock:
                yield
        finally:
            remaining = self._lock_users[user_id] - 1
            if remaining:
                self._lock_users[user_id] = remaining
            else:
                del self._lock_users[user_id]
                del self._locks[user_id]

    def start_session(self, user_id: Hashable, test_name: str) -> Session:
        """Начать тест для пользователя.

        Незавершённая сессия пользователя заменяется новой.

        Raises:
            TestNotFoundError: тест не найден, сессия не создаётся
        """
        test = self.catalog.find(test_name)
        session = Session(test)
        previous = self._sessions.get(user_id)
        if previous is not None:
            logger.info(f"[Registry] Replacing unfinished session for {user_id}: {previous!r}")
        self._sessions[user_id] = session
        logger.debug(f"[Registry] Session started for {user_id}: {test.name}")
        return session

    def get_session(self, user_id: Hashable) -> Optional[Session]:
        return self._sessions.get(user_id)

    def require_session(self, user_id: Hashable) -> Session:
        """Сессия пользователя или SessionNotFoundError."""
        session = self._sessions.get(user_id)
        if session is None:
            raise SessionNotFoundError(user_id)
        return session

    def remove_session(self, user_id: Hashable) -> bool:
        """Удалить сессию. Повторное удаление — не ошибка.

        Returns:
            True, если сессия была
        """
        removed = self._sessions.pop(user_id, None) is not None
        if removed:
            logger.debug(f"[Registry] Session removed for {user_id}")
        return removed
