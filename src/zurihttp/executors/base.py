"""
base.py
-------
Defines the BaseExecutor interface for all job executors.
All executors should inherit from this class and implement the execute method.
"""
from ..models import Outcome, TaskInvocation


class BaseExecutor:
    def execute(self, invocation: TaskInvocation) -> Outcome:
        """
        invocation: the job handed over by the broker
        Returns: the outcome to report back to the broker
        """
        raise NotImplementedError
