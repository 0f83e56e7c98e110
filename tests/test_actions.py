"""Tests for AiAction configuration and execution."""

import json

import pytest

from panel_ai_action import AiAction
from panel_ai_action.agents import ActionMode, AgentContext, FakeAgentAction, RunAgentJob, register_agent_backend
from panel_ai_action.exceptions import AgentNotConfiguredError, AgentResolutionError
from panel_ai_action.settings import settings
from panel_ai_action.testing import FakeJobQueue

from .support.stubs import AsyncSaveRecord, RecordingBackend, StubAgent, StubRecord


class TestMakeDefaults:
    """Tests for AiAction.make() defaults."""

    def test_default_name(self):
        assert AiAction.make().name == "ai"

    def test_custom_name(self):
        assert AiAction.make("summarise").name == "summarise"

    def test_presentation_defaults(self):
        action = AiAction.make()
        assert action.get_icon() == "heroicon-o-sparkles"
        assert action.get_color() == "primary"
        assert action.get_label() == settings.default_label
        assert action.get_modal_width() == settings.modal_size

    def test_mode_defaults(self):
        action = AiAction.make()
        assert action.mode is ActionMode.SYNC
        assert action.queue == "default"
        assert action.streaming is False
        assert action.persist_column is None


class TestFluentConfiguration:
    """Tests for the HasAgentConfiguration setters."""

    def test_agent_stores_class(self):
        assert AiAction.make().agent(StubAgent).agent_class is StubAgent

    def test_agent_stores_dotted_path(self):
        action = AiAction.make().agent("app.agents.SummaryAgent")
        assert action.agent_class == "app.agents.SummaryAgent"

    def test_stream(self):
        assert AiAction.make().stream().streaming is True
        assert AiAction.make().stream(False).streaming is False

    def test_with_user_instruction(self):
        action = AiAction.make().with_user_instruction("What would you like to know?")
        assert action.show_user_instruction is True
        assert action.user_instruction_placeholder == "What would you like to know?"

    def test_persist_result_to(self):
        assert AiAction.make().persist_result_to("ai_summary").persist_column == "ai_summary"

    def test_queued(self):
        action = AiAction.make().queued("ai-jobs")
        assert action.mode is ActionMode.QUEUED
        assert action.queue == "ai-jobs"

    def test_queued_without_name_uses_default_queue(self):
        assert AiAction.make().queued().queue == settings.default_queue

    def test_using_provider(self):
        action = AiAction.make().using_provider("openai", "gpt-4o")
        assert action.provider_override == "openai"
        assert action.model_override == "gpt-4o"

    def test_setters_return_same_instance(self):
        action = AiAction.make()
        assert action.agent(StubAgent).stream().queued().with_context(lambda c, r: c) is action

    def test_configuration_is_per_instance(self):
        first = AiAction.make().stream().persist_result_to("a")
        second = AiAction.make()
        assert first.streaming and not second.streaming
        assert second.persist_column is None


class TestRunAgent:
    """Tests for run_agent() in sync mode."""

    async def test_runs_agent_once_for_record(self, record: StubRecord):
        FakeAgentAction.fake_response(StubAgent, "This is the summary.")

        results = await AiAction.make().agent(StubAgent).record(record).run_agent()

        FakeAgentAction.assert_agent_called(StubAgent, 1)
        assert [r.text for r in results] == ["This is the summary."]
        [call] = FakeAgentAction.calls(StubAgent)
        assert call.context.record is record
        assert call.context.records == (record,)

    async def test_call_runs_action_callback(self, record: StubRecord):
        FakeAgentAction.fake_response(StubAgent, "Via call().")

        await AiAction.make().agent(StubAgent).persist_result_to("ai_summary").record(record).call()

        assert record.ai_summary == "Via call()."

    async def test_persists_text_result(self, record: StubRecord):
        FakeAgentAction.fake_response(StubAgent, "Summary text.")

        await AiAction.make().agent(StubAgent).persist_result_to("ai_summary").record(record).run_agent()

        assert record.ai_summary == "Summary text."
        assert record.save_calls == 1

    async def test_persists_json_for_structured_result(self, record: StubRecord):
        structured = {"score": 9, "tags": ["important", "urgent"]}
        FakeAgentAction.fake_response(StubAgent, '{"score":9}', structured)

        await AiAction.make().agent(StubAgent).persist_result_to("ai_structured").record(record).run_agent()

        assert json.loads(record.ai_structured) == structured
        assert record.ai_structured.startswith('{"score":9')

    async def test_awaits_async_save(self):
        FakeAgentAction.fake_response(StubAgent, "Saved async.")
        record = AsyncSaveRecord(id=3)

        await AiAction.make().agent(StubAgent).persist_result_to("ai_summary").record(record).run_agent()

        assert record.ai_summary == "Saved async."
        assert record.saved is True

    async def test_without_persist_column_record_untouched(self, record: StubRecord):
        FakeAgentAction.fake_response(StubAgent, "Not stored.")

        await AiAction.make().agent(StubAgent).record(record).run_agent()

        assert record.ai_summary == ""
        assert record.save_calls == 0

    async def test_resolves_agent_from_dotted_path(self, record: StubRecord):
        FakeAgentAction.fake_response(StubAgent, "From path.")

        await AiAction.make().agent("tests.support.stubs.StubAgent").record(record).run_agent()

        FakeAgentAction.assert_agent_called(StubAgent, 1)

    async def test_unconfigured_agent_raises(self, record: StubRecord):
        with pytest.raises(AgentNotConfiguredError):
            await AiAction.make().record(record).run_agent()

    async def test_unimportable_agent_raises(self, record: StubRecord):
        with pytest.raises(AgentResolutionError, match="Failed to import"):
            await AiAction.make().agent("tests.support.stubs.MissingAgent").record(record).run_agent()

    async def test_non_agent_class_raises(self, record: StubRecord):
        with pytest.raises(AgentResolutionError, match="AgentAction subclass"):
            await AiAction.make().agent("tests.support.stubs.NotAnAgent").record(record).run_agent()


class TestContextEnrichment:
    """Tests for with_context() and the user instruction."""

    async def test_callback_receives_context_and_record(self, record: StubRecord):
        FakeAgentAction.fake_response(StubAgent, "ctx enriched")
        seen: list[tuple[AgentContext, object]] = []

        def enrich(context: AgentContext, rec: object) -> AgentContext:
            seen.append((context, rec))
            return context.with_meta("enriched", True)

        await AiAction.make().agent(StubAgent).with_context(enrich).record(record).run_agent()

        assert len(seen) == 1
        assert seen[0][1] is record
        [call] = FakeAgentAction.calls(StubAgent)
        assert call.context.get_meta("enriched") is True

    async def test_user_instruction_from_form_data(self, record: StubRecord):
        FakeAgentAction.fake_response(StubAgent, "Focused.")

        action = AiAction.make().agent(StubAgent).with_user_instruction("Focus on...").record(record)
        await action.call({"user_instruction": "Focus on the budget"})

        [call] = FakeAgentAction.calls(StubAgent)
        assert call.context.get_meta("userInstruction") == "Focus on the budget"
        assert call.context.user_instruction == "Focus on the budget"

    async def test_user_instruction_defaults_to_empty(self, record: StubRecord):
        FakeAgentAction.fake_response(StubAgent, "Focused.")

        await AiAction.make().agent(StubAgent).with_user_instruction().record(record).run_agent()

        [call] = FakeAgentAction.calls(StubAgent)
        assert call.context.get_meta("userInstruction") == ""

    async def test_user_instruction_ignored_when_disabled(self, record: StubRecord):
        FakeAgentAction.fake_response(StubAgent, "Plain.")

        await AiAction.make().agent(StubAgent).record(record).call({"user_instruction": "ignored"})

        [call] = FakeAgentAction.calls(StubAgent)
        assert "userInstruction" not in call.context.meta

    async def test_enrichment_runs_after_user_instruction(self, record: StubRecord):
        FakeAgentAction.fake_response(StubAgent, "Ordered.")

        def uppercase_instruction(context: AgentContext, rec: object) -> AgentContext:
            return context.with_meta("userInstruction", context.get_meta("userInstruction").upper())

        action = AiAction.make().agent(StubAgent).with_user_instruction().with_context(uppercase_instruction).record(record)
        await action.call({"user_instruction": "be brief"})

        [call] = FakeAgentAction.calls(StubAgent)
        assert call.context.user_instruction == "BE BRIEF"


class TestProviderOverride:
    """Tests for using_provider() during execution."""

    async def test_override_reaches_backend(self, record: StubRecord, backend: RecordingBackend):
        register_agent_backend(backend)

        await AiAction.make().agent(StubAgent).using_provider("openai", "gpt-4o").record(record).run_agent()

        assert backend.runs[0]["provider"] == "openai"
        assert backend.runs[0]["model"] == "gpt-4o"
        assert backend.runs[0]["prompt"] == "Please summarise: Quarterly report"

    async def test_without_override_agent_defaults_apply(self, record: StubRecord, backend: RecordingBackend):
        register_agent_backend(backend)

        await AiAction.make().agent(StubAgent).record(record).run_agent()

        assert backend.runs[0]["provider"] == "anthropic"
        assert backend.runs[0]["model"] == "claude-sonnet"


class TestQueued:
    """Tests for queued dispatch."""

    async def test_dispatches_job_and_does_not_execute_inline(self, record: StubRecord, fake_queue: FakeJobQueue):
        FakeAgentAction.fake_response(StubAgent, "Should not see this.")

        results = await AiAction.make().agent(StubAgent).queued("default").persist_result_to("ai_summary").record(record).run_agent()

        assert results == []
        fake_queue.assert_pushed(RunAgentJob, count=1, queue="default")
        FakeAgentAction.assert_agent_not_called(StubAgent)
        assert record.ai_summary == ""

    async def test_job_carries_context_and_persistence(self, record: StubRecord, fake_queue: FakeJobQueue):
        await AiAction.make().agent(StubAgent).queued("ai").persist_result_to("ai_summary").using_provider("openai", "gpt-4o").record(record).run_agent()

        [job] = fake_queue.jobs()
        assert job.queue == "ai"
        assert job.record is record
        assert job.persist_column == "ai_summary"
        assert job.context.record is record
        assert job.agent.provider() == "openai"


class TestModalContent:
    """Tests for the rendered modal content."""

    def test_renders_instruction_field(self, record: StubRecord):
        action = AiAction.make().agent(StubAgent).with_user_instruction("Ask anything").record(record)

        html = action.get_modal_content()

        assert 'name="user_instruction"' in html
        assert 'placeholder="Ask anything"' in html
        assert 'data-agent-class="tests.support.stubs.StubAgent"' in html
        assert 'data-record-id="1"' in html
        assert 'data-record-class="tests.support.stubs.StubRecord"' in html

    def test_omits_instruction_field_by_default(self, record: StubRecord):
        html = AiAction.make().agent(StubAgent).record(record).get_modal_content()
        assert "user_instruction" not in html


class TestApplyProviderOverride:
    """Tests for apply_provider_override()."""

    def test_returns_agent_unchanged_without_override(self):
        agent = StubAgent()
        assert AiAction.make().apply_provider_override(agent) is agent

    def test_requires_both_provider_and_model(self):
        action = AiAction.make()
        action.provider_override = "openai"
        agent = StubAgent()

        assert action.apply_provider_override(agent) is agent

    def test_wraps_agent_with_override(self):
        wrapped = AiAction.make().using_provider("openai", "gpt-4o").apply_provider_override(StubAgent())

        assert wrapped.provider() == "openai"
        assert wrapped.model() == "gpt-4o"
        assert wrapped.agent_class() is StubAgent
