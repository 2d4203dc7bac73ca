"""
celery_worker.py
---------------
Defines the Celery app and the job entrypoint. Jobs handed over by the broker
are dispatched to the executor registered for their job type, and the outcome
is reported back to the broker through a JobClient.
"""

import logging

from celery import Celery
from celery.signals import worker_init
from celery.utils.log import get_task_logger

from .broker import CeleryJobClient, JobClient, report_outcome
from .config import BROKER_URL, RESULT_BACKEND, settings
from .models import Fail, TaskInvocation

app = Celery("zurihttp", broker=BROKER_URL, backend=RESULT_BACKEND)

logger = get_task_logger(__name__)


# --- Executor registry, keyed by job type ---
EXECUTOR_REGISTRY = {}
# One executor per job type and process, so its HTTP session is reused across jobs
_EXECUTORS = {}


def register_executor(job_type, executor_cls):
    EXECUTOR_REGISTRY[job_type] = executor_cls
    _EXECUTORS.pop(job_type, None)


def _register_builtin_executors():
    from .executors.http_exec import HTTPExecutor

    register_executor(settings.JOB_TYPE, HTTPExecutor)


_register_builtin_executors()


def get_executor(job_type):
    if job_type not in EXECUTOR_REGISTRY:
        raise ValueError(f"Unknown job type: {job_type}")
    if job_type not in _EXECUTORS:
        _EXECUTORS[job_type] = EXECUTOR_REGISTRY[job_type]()
    return _EXECUTORS[job_type]


job_client: JobClient = CeleryJobClient(app)


@app.task(bind=True, name="zurihttp.run_job", acks_late=True)
def run_job(self, job_type, invocation):
    invocation = TaskInvocation.model_validate(invocation)
    logger.info("Handling %s job %s", job_type, invocation.key)

    try:
        executor = get_executor(job_type)
        outcome = executor.execute(invocation)
    except Exception as e:
        # Includes remote configuration errors; the broker decides about redelivery
        logger.exception("Job %s failed", invocation.key)
        outcome = Fail(error_message=str(e), retries=max(invocation.retries - 1, 0))

    report_outcome(job_client, invocation, outcome)
    return outcome.model_dump(mode="json")


# --- Signals ---

@worker_init.connect
def worker_ready(sender=None, **kwargs):
    """Set the log level and check the external variables source at startup."""
    logging.getLogger("zurihttp").setLevel(settings.LOG_LEVEL)

    from .variables import get_variables_provider
    get_variables_provider().get_variables()
    logger.info("Worker initialized for job type '%s'.", settings.JOB_TYPE)
