"""Job queue abstraction for queued agent runs.

Queued actions dispatch one RunAgentJob per record and return immediately.
Where the job goes is decided by the registered JobQueue; by default jobs
are submitted as Prefect background tasks, which a task worker started
with serve_agent_jobs() picks up.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager

from prefect import task
from prefect.task_worker import serve

from panel_ai_action.logging import get_pipeline_logger

from ._registration import Registration
from .jobs import RunAgentJob

__all__ = [
    "JobQueue",
    "PrefectJobQueue",
    "dispatch",
    "get_job_queue",
    "register_job_queue",
    "reset_job_queue",
    "run_agent_job",
    "serve_agent_jobs",
    "temporary_queue",
]

logger = get_pipeline_logger(__name__)


class JobQueue(ABC):
    """Destination for dispatched agent jobs."""

    @abstractmethod
    def push(self, job: RunAgentJob) -> None:
        """Enqueue the job on job.queue."""


@task(name="run-agent-job")
async def run_agent_job(job: RunAgentJob) -> None:
    """Prefect background task executing one queued agent run."""
    await job.handle()


class PrefectJobQueue(JobQueue):
    """Submits jobs as Prefect background task runs tagged with the queue name."""

    def push(self, job: RunAgentJob) -> None:
        run_agent_job.with_options(tags={job.queue}).delay(job)


async def serve_agent_jobs() -> None:
    """Run a Prefect task worker that executes dispatched agent jobs."""
    await serve(run_agent_job)


_queues: Registration[JobQueue] = Registration("Job queue", "reset_job_queue", default=PrefectJobQueue)


def register_job_queue(queue: JobQueue) -> None:
    """Register the job queue used by dispatch().

    Raises:
        RuntimeError: If a queue is already registered
    """
    _queues.register(queue)


def get_job_queue() -> JobQueue:
    """Get the registered job queue, falling back to PrefectJobQueue."""
    return _queues.get()


def reset_job_queue() -> None:
    _queues.reset()


@contextmanager
def temporary_queue(queue: JobQueue) -> Iterator[JobQueue]:
    """Temporarily register a queue, restoring the previous one on exit."""
    with _queues.temporary(queue):
        yield queue


def dispatch(job: RunAgentJob) -> None:
    """Push a job onto the registered queue."""
    queue = get_job_queue()
    logger.info(f"Dispatching '{job.agent.agent_class().__name__}' onto queue '{job.queue}' via {type(queue).__name__}")
    queue.push(job)
