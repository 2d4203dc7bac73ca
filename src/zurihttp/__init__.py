# Re-export main modules and objects for easier imports
from .models import TaskInvocation, Complete, Fail, ThrowError, Pending, OutcomeType
from .overlay import ConfigurationOverlay
from .executors import HTTPExecutor
from .variables import get_variables_provider, RemoteVariablesProvider, LocalVariablesProvider
from .celery_worker import app, run_job
from .config import settings
