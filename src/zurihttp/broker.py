"""
broker.py
---------
Outbound side of the broker protocol. A job is finished with exactly one of
complete / fail / throw_error, or left open when its outcome is pending.
"""
import logging
from typing import Any, Dict, Union

from celery import Celery

from .config import settings
from .models import Complete, Fail, Outcome, TaskInvocation, ThrowError

logger = logging.getLogger(__name__)

JobKey = Union[int, str]


class JobClient:
    def complete(self, job_key: JobKey, variables: Dict[str, Any]) -> None:
        raise NotImplementedError

    def fail(self, job_key: JobKey, retries: int, error_message: str) -> None:
        raise NotImplementedError

    def throw_error(self, job_key: JobKey, error_code: str, error_message: str) -> None:
        raise NotImplementedError


class CeleryJobClient(JobClient):
    """Sends completion commands to the broker as Celery tasks."""

    def __init__(
        self,
        app: Celery,
        complete_task: str = settings.BROKER_COMPLETE_TASK,
        fail_task: str = settings.BROKER_FAIL_TASK,
        throw_error_task: str = settings.BROKER_THROW_ERROR_TASK,
    ):
        self.app = app
        self.complete_task = complete_task
        self.fail_task = fail_task
        self.throw_error_task = throw_error_task

    def complete(self, job_key, variables):
        self.app.send_task(self.complete_task, args=[job_key, variables])

    def fail(self, job_key, retries, error_message):
        self.app.send_task(self.fail_task, args=[job_key, retries, error_message])

    def throw_error(self, job_key, error_code, error_message):
        self.app.send_task(self.throw_error_task, args=[job_key, error_code, error_message])


def report_outcome(job_client: JobClient, invocation: TaskInvocation, outcome: Outcome) -> None:
    if isinstance(outcome, Complete):
        job_client.complete(invocation.key, outcome.variables)
    elif isinstance(outcome, Fail):
        logger.info("Failing job %s (%d retries left): %s", invocation.key, outcome.retries, outcome.error_message)
        job_client.fail(invocation.key, outcome.retries, outcome.error_message)
    elif isinstance(outcome, ThrowError):
        logger.info("Throwing error %s for job %s", outcome.error_code, invocation.key)
        job_client.throw_error(invocation.key, outcome.error_code, outcome.error_message)
    else:
        logger.debug("Job %s stays open", invocation.key)
