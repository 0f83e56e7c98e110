"""Test utilities for applications built on panel-ai-action.

FakeAgentAction fakes agent responses without any backend; FakeJobQueue
captures queued dispatches instead of submitting them. Prefect's
disable_run_logger is re-exported for calling task bodies directly
(run_agent_job.fn) outside a flow run.
"""

from dataclasses import dataclass, field

from prefect.logging import disable_run_logger

from panel_ai_action.agents import FakeAgentAction, JobQueue, RunAgentJob

__all__ = ["FakeAgentAction", "FakeJobQueue", "disable_run_logger"]


@dataclass
class FakeJobQueue(JobQueue):
    """Job queue recording pushed jobs instead of running them.

    Example:
        >>> with temporary_queue(FakeJobQueue()) as queue:
        ...     await AiAction.make().agent(SummaryAgent).queued("ai").record(post).run_agent()
        >>> queue.assert_pushed(RunAgentJob, queue="ai")
    """

    pushed: list[RunAgentJob] = field(default_factory=list)

    def push(self, job: RunAgentJob) -> None:
        self.pushed.append(job)

    def jobs(self, job_type: type[RunAgentJob] = RunAgentJob, queue: str | None = None) -> list[RunAgentJob]:
        return [job for job in self.pushed if isinstance(job, job_type) and (queue is None or job.queue == queue)]

    def assert_pushed(self, job_type: type[RunAgentJob] = RunAgentJob, count: int | None = None, queue: str | None = None) -> None:
        matched = len(self.jobs(job_type, queue))
        where = f" on queue '{queue}'" if queue is not None else ""
        if count is None:
            assert matched > 0, f"Expected {job_type.__name__} to be pushed{where}, but it was not."
        else:
            assert matched == count, f"Expected {job_type.__name__} to be pushed {count} time(s){where}, pushed {matched} time(s)."

    def assert_nothing_pushed(self) -> None:
        assert not self.pushed, f"Expected no jobs to be pushed, {len(self.pushed)} were pushed."
