"""
Центральный диспетчер — единая точка обработки входящих текстов.

Не зависит от транспорта: принимает (user_id, text), возвращает Reply.
Построение сообщений Telegram — в handlers/.

Команды:
    /start, /help, /tests, /cancel — служебные
    /<команда теста>               — начать тест (маппинг из TEST_COMMANDS)
    остальное                      — номер ответа на текущий вопрос
"""

import re
from dataclasses import dataclass, field
from typing import Hashable, Optional

from config import get_logger
from core.errors import (
    ConfigurationError,
    InvalidAnswerSelection,
    SessionNotFoundError,
    TestNotFoundError,
    UnansweredQuestionError,
)
from core.questionnaire import UNDETERMINED
from core.registry import SessionRegistry
from core.session import Session
from locales import t

logger = get_logger(__name__)

# Номер ответа: только ASCII-цифры, без "_" и юникодных цифр
ANSWER_NUMBER_RE = re.compile(r"[+-]?[0-9]+")


@dataclass
class Reply:
    """Ответ пользователю.

    Attributes:
        text: Текст сообщения
        options: Варианты ответа для клавиатуры (пусто — убрать клавиатуру)
        finished: Тест завершён этим ответом
    """
    text: str
    options: list[str] = field(default_factory=list)
    finished: bool = False


class Dispatcher:
    """Диспетчер бота: команды, старт тестов и приём ответов."""

    def __init__(self, registry: SessionRegistry, test_commands: dict[str, str]):
        self.registry = registry
        self.test_commands = dict(test_commands)

    @property
    def default_command(self) -> str:
        """Команда, которую предлагаем для начала теста."""
        return next(iter(self.test_commands), "tests")

    def validate(self) -> None:
        """Проверить, что каждой команде соответствует загруженный тест.

        Raises:
            ConfigurationError: тестов нет или команда указывает на отсутствующий тест
        """
        if not len(self.registry.catalog):
            raise ConfigurationError("No tests loaded")
        for command, fragment in self.test_commands.items():
            try:
                self.registry.catalog.find(fragment)
            except TestNotFoundError as e:
                raise ConfigurationError(f"/{command}: test {fragment!r} not found in config") from e

    # =================================================================
    # ROUTING
    # =================================================================

    @staticmethod
    def parse_command(text: str) -> Optional[str]:
        """Имя команды без "/" и "@bot", или None для обычного текста."""
        text = (text or "").strip()
        if not text.startswith("/"):
            return None
        return text.split()[0][1:].split("@", 1)[0]

    async def handle_text(self, user_id: Hashable, text: str) -> Reply:
        """Обработать входящий текст пользователя."""
        command = self.parse_command(text)
        logger.debug(f"[Dispatcher] {user_id}: command={command}, text={(text or '')[:50]}")

        if command is None:
            return await self.answer(user_id, text)
        if command == "start":
            return await self.start()
        if command == "help":
            return await self.help()
        if command == "tests":
            return await self.list_tests()
        if command == "cancel":
            return await self.cancel(user_id)
        if command in self.test_commands:
            return await self.start_test(user_id, self.test_commands[command])
        return await self.answer(user_id, text)

    # =================================================================
    # COMMANDS
    # =================================================================

    def _command_lines(self) -> list[str]:
        lines = []
        for command, fragment in self.test_commands.items():
            try:
                name = self.registry.catalog.find(fragment).name
            except TestNotFoundError:
                continue
            lines.append(t('commands.test', command=command, name=name))
        lines += [t('commands.tests'), t('commands.help'), t('commands.cancel')]
        return lines

    async def start(self) -> Reply:
        return Reply("\n".join([t('welcome'), "", t('commands.title'), *self._command_lines()]))

    async def help(self) -> Reply:
        return Reply("\n".join([
            t('help.title'), "",
            t('help.intro'), "",
            t('commands.title'), *self._command_lines(), "",
            t('help.answer_hint'),
        ]))

    async def list_tests(self) -> Reply:
        lines = []
        for command, fragment in self.test_commands.items():
            try:
                test = self.registry.catalog.find(fragment)
            except TestNotFoundError:
                continue
            lines.append(t('tests.item', command=command, name=test.name, count=test.question_count))
        if not lines:
            return Reply(t('tests.empty'))
        return Reply("\n".join([t('tests.title'), *lines]))

    async def start_test(self, user_id: Hashable, test_name: str) -> Reply:
        """Начать тест, имя которого содержит test_name, и задать первый вопрос."""
        async with self.registry.lock(user_id):
            restarted = self.registry.get_session(user_id) is not None
            try:
                session = self.registry.start_session(user_id, test_name)
            except TestNotFoundError:
                logger.error(f"[Dispatcher] Test {test_name!r} not found for {user_id}")
                return Reply(t('test.unavailable'))

            logger.info(f"[Dispatcher] Test started for {user_id}: {session.test.name}")

            if session.total_questions() == 0:
                self.registry.remove_session(user_id)
                logger.error(f"[Dispatcher] Test {session.test.name!r} has no questions")
                return Reply(t('test.no_questions'))

            header = []
            if restarted:
                header.append(t('test.restarted'))
            header.append(t('test.started', name=session.test.name))
            if session.test.description:
                header.append(session.test.description)

            reply = self._ask_next(user_id, session)
            reply.text = "\n\n".join(header + [reply.text])
            return reply

    async def cancel(self, user_id: Hashable) -> Reply:
        async with self.registry.lock(user_id):
            if self.registry.remove_session(user_id):
                logger.info(f"[Dispatcher] Session cancelled for {user_id}")
                return Reply(t('cancel.done', command=self.default_command))
        logger.warning(f"[Dispatcher] Cancel without active session: {user_id}")
        return Reply(t('cancel.nothing'))

    # =================================================================
    # ANSWERS
    # =================================================================

    async def answer(self, user_id: Hashable, text: str) -> Reply:
        """Принять номер ответа на текущий вопрос."""
        async with self.registry.lock(user_id):
            try:
                session = self.registry.require_session(user_id)
                question = session.current_question()
                if question is None:
                    raise UnansweredQuestionError(f"No current question for {user_id}")
                raw = (text or "").strip()
                if not ANSWER_NUMBER_RE.fullmatch(raw):
                    raise InvalidAnswerSelection(raw, len(question.options))
                label = question.label_at(int(raw))
                score = session.answer_current(label)
            except SessionNotFoundError:
                logger.warning(f"[Dispatcher] Answer without active session: {user_id}")
                return Reply(t('answer.no_session', command=self.default_command))
            except UnansweredQuestionError:
                logger.error(f"[Dispatcher] No outstanding question for {user_id}")
                return Reply(t('answer.no_question'))
            except InvalidAnswerSelection as e:
                logger.warning(f"[Dispatcher] Invalid answer from {user_id}: {e.raw!r}")
                if not ANSWER_NUMBER_RE.fullmatch(e.raw):
                    return Reply(t('answer.not_a_number'), options=question.answer_labels())
                return Reply(t('answer.out_of_range', count=e.options_count), options=question.answer_labels())

            logger.debug(f"[Dispatcher] Answer from {user_id}: {label!r} = {score}")

            if session.is_complete():
                return self._finish(user_id, session)
            return self._ask_next(user_id, session)

    # =================================================================
    # INTERNAL METHODS
    # =================================================================

    def _ask_next(self, user_id: Hashable, session: Session) -> Reply:
        """Задать следующий вопрос. Вопросы без вариантов ответа пропускаются."""
        while True:
            question = session.advance()
            if question is None:
                return self._finish(user_id, session)
            if question.is_answerable:
                break
            logger.warning(
                f"[Dispatcher] Skipping question {session.question_number()} of "
                f"'{session.test.name}': no answers"
            )

        lines = [
            t('question.header', number=session.question_number(), total=session.total_questions()),
            question.question_text,
            "",
        ]
        labels = question.answer_labels()
        lines += [t('question.option', number=i, label=label) for i, label in enumerate(labels, 1)]
        return Reply("\n".join(lines), options=labels)

    def _finish(self, user_id: Hashable, session: Session) -> Reply:
        """Итог теста: сумма баллов и диагноз. Сессия удаляется."""
        diagnosis = session.final_diagnosis()
        score = session.total_score()
        self.registry.remove_session(user_id)
        if diagnosis == UNDETERMINED:
            logger.warning(f"[Dispatcher] No diagnosis rule for score {score} in '{session.test.name}'")
        logger.info(f"[Dispatcher] Test completed for {user_id}: score={score}, result={diagnosis}")
        return Reply(
            "\n\n".join([
                t('result.title'),
                t('result.score', score=score, max_score=session.test.max_score),
                t('result.diagnosis', diagnosis=diagnosis),
                t('result.next', command=self.default_command),
            ]),
            finished=True,
        )
