"""
Тесты диспетчера: команды, прохождение теста MOSF, некорректные ответы.

Без Telegram: Dispatcher принимает (user_id, text) и возвращает Reply.
"""

import pytest

from core.dispatcher import Dispatcher
from core.errors import ConfigurationError
from core.questionnaire import Question, TestDefinition, UNDETERMINED
from core.registry import SessionRegistry, TestCatalog

USER = 1001


@pytest.fixture
def dispatcher(registry):
    return Dispatcher(registry, {"mosftest": "MOSF", "gcs": "Глазго"})


async def _run(dispatcher, *texts):
    reply = None
    for text in texts:
        reply = await dispatcher.handle_text(USER, text)
    return reply


class TestEndToEnd:

    @pytest.mark.asyncio
    async def test_start_asks_first_question(self, dispatcher):
        reply = await dispatcher.handle_text(USER, "/mosftest")
        assert "Вопрос 1 из 2" in reply.text
        assert "Орган A" in reply.text
        assert "1. none" in reply.text and "3. severe" in reply.text
        assert reply.options == ["none", "mild", "severe"]
        assert not reply.finished

    @pytest.mark.asyncio
    async def test_mild_and_severe_is_high_risk(self, dispatcher, registry):
        reply = await _run(dispatcher, "/mosftest", "2")
        assert "Вопрос 2 из 2" in reply.text
        assert reply.options == ["none", "severe"]

        reply = await dispatcher.handle_text(USER, "2")
        assert reply.finished
        assert "High risk" in reply.text
        assert "3 из 5" in reply.text
        assert reply.options == []
        assert registry.get_session(USER) is None

    @pytest.mark.asyncio
    async def test_all_none_is_low_risk(self, dispatcher):
        reply = await _run(dispatcher, "/mosftest", "1", "1")
        assert reply.finished
        assert "Low risk" in reply.text

    @pytest.mark.asyncio
    async def test_unmatched_total_is_undetermined(self, registry):
        test = TestDefinition(
            "MOSF",
            (Question.create("Q", "p", {"max": 10}),),
            (("0-1", "Low risk"), ("2-5", "High risk")),
        )
        dispatcher = Dispatcher(SessionRegistry(TestCatalog([test])), {"mosftest": "MOSF"})
        reply = await _run(dispatcher, "/mosftest", "1")
        assert UNDETERMINED in reply.text

    @pytest.mark.asyncio
    async def test_command_with_bot_mention(self, dispatcher, registry):
        await dispatcher.handle_text(USER, "/mosftest@diagnostic_bot")
        assert registry.get_session(USER) is not None


class TestInvalidInput:

    @pytest.mark.asyncio
    async def test_answer_without_session(self, dispatcher, registry):
        reply = await dispatcher.handle_text(USER, "1")
        assert "нет активного теста" in reply.text
        assert "/mosftest" in reply.text
        assert registry.get_session(USER) is None

    @pytest.mark.asyncio
    async def test_non_numeric_answer(self, dispatcher, registry):
        reply = await _run(dispatcher, "/mosftest", "severe")
        assert "введите номер ответа" in reply.text
        assert reply.options == ["none", "mild", "severe"]
        assert registry.get_session(USER).collected_scores == {}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer", ["1_0", "²", "١", "３", "1.0"])
    async def test_only_ascii_digits_are_numbers(self, dispatcher, registry, answer):
        """Числа с "_" и не-ASCII цифры — не номер ответа"""
        reply = await _run(dispatcher, "/mosftest", answer)
        assert "введите номер ответа" in reply.text
        assert "из предложенных" not in reply.text
        session = registry.get_session(USER)
        assert session.cursor == 1
        assert session.collected_scores == {}

    @pytest.mark.asyncio
    async def test_signed_number_is_accepted(self, dispatcher, registry):
        await _run(dispatcher, "/mosftest", "+2")
        assert registry.get_session(USER).collected_scores == {"organA": 1}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer", ["0", "4", "-1"])
    async def test_out_of_range_answer(self, dispatcher, registry, answer):
        reply = await _run(dispatcher, "/mosftest", answer)
        assert "из предложенных" in reply.text
        session = registry.get_session(USER)
        assert session.cursor == 1
        assert session.collected_scores == {}

    @pytest.mark.asyncio
    async def test_retry_after_invalid_answer(self, dispatcher):
        reply = await _run(dispatcher, "/mosftest", "abc", "9", "3", "1")
        assert reply.finished
        assert "High risk" in reply.text

    @pytest.mark.asyncio
    async def test_unknown_command_is_treated_as_answer(self, dispatcher):
        reply = await _run(dispatcher, "/mosftest", "/unknown")
        assert "введите номер ответа" in reply.text


class TestCommands:

    @pytest.mark.asyncio
    async def test_start_lists_test_commands(self, dispatcher):
        reply = await dispatcher.handle_text(USER, "/start")
        assert "/mosftest — MOSF" in reply.text
        assert "/cancel" in reply.text

    @pytest.mark.asyncio
    async def test_help(self, dispatcher):
        reply = await dispatcher.handle_text(USER, "/help")
        assert "номер выбранного ответа" in reply.text

    @pytest.mark.asyncio
    async def test_tests_list(self, dispatcher):
        reply = await dispatcher.handle_text(USER, "/tests")
        assert "/gcs — Шкала комы Глазго (1 вопр.)" in reply.text

    @pytest.mark.asyncio
    async def test_cancel(self, dispatcher, registry):
        await dispatcher.handle_text(USER, "/mosftest")
        reply = await dispatcher.handle_text(USER, "/cancel")
        assert "отменен" in reply.text
        assert registry.get_session(USER) is None

        reply = await dispatcher.handle_text(USER, "/cancel")
        assert "Нет активного теста" in reply.text

    @pytest.mark.asyncio
    async def test_restart_discards_progress(self, dispatcher, registry):
        await _run(dispatcher, "/mosftest", "3")
        reply = await dispatcher.handle_text(USER, "/mosftest")
        assert "Предыдущий незавершённый тест отменён" in reply.text
        assert "Вопрос 1 из 2" in reply.text
        assert registry.get_session(USER).collected_scores == {}

    @pytest.mark.asyncio
    async def test_users_are_independent(self, dispatcher, registry):
        await dispatcher.handle_text(1, "/mosftest")
        await dispatcher.handle_text(2, "/gcs")
        await dispatcher.handle_text(1, "3")
        assert registry.get_session(1).collected_scores == {"organA": 3}
        assert registry.get_session(2).collected_scores == {}


class TestUnanswerableQuestions:

    @pytest.mark.asyncio
    async def test_question_without_answers_is_skipped(self):
        test = TestDefinition(
            "MOSF",
            (
                Question.create("Пустой", "empty", {}),
                Question.create("Орган B", "organB", {"none": 0, "severe": 2}),
            ),
            (("0-1", "Low risk"), ("2-5", "High risk")),
        )
        dispatcher = Dispatcher(SessionRegistry(TestCatalog([test])), {"mosftest": "MOSF"})
        reply = await dispatcher.handle_text(USER, "/mosftest")
        assert "Вопрос 2 из 2" in reply.text
        reply = await dispatcher.handle_text(USER, "2")
        assert "High risk" in reply.text

    @pytest.mark.asyncio
    async def test_test_without_questions(self):
        registry = SessionRegistry(TestCatalog([TestDefinition("MOSF")]))
        dispatcher = Dispatcher(registry, {"mosftest": "MOSF"})
        reply = await dispatcher.handle_text(USER, "/mosftest")
        assert "нет вопросов" in reply.text
        assert registry.get_session(USER) is None


class TestValidate:

    def test_all_commands_resolve(self, dispatcher):
        dispatcher.validate()

    def test_missing_test_is_configuration_error(self, registry):
        with pytest.raises(ConfigurationError):
            Dispatcher(registry, {"apgar": "Apgar"}).validate()

    def test_empty_catalog_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            Dispatcher(SessionRegistry(TestCatalog()), {}).validate()
