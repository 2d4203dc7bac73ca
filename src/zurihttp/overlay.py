"""
overlay.py
----------
Builds the per-job configuration view. Four read-only layers are searched in
order of precedence:

    1. jobKey / processInstanceKey of the job (can never be shadowed)
    2. custom headers of the task
    3. job variables
    4. externally supplied variables (remote configuration or environment)

A fresh overlay is built for every job and is never shared between jobs.
"""
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .models import TaskInvocation
from .utils.placeholders import to_text

JOB_KEY = "jobKey"
PROCESS_INSTANCE_KEY = "processInstanceKey"


class ConfigurationOverlay:
    def __init__(
        self,
        custom_headers: Optional[Mapping[str, str]] = None,
        variables: Optional[Mapping[str, Any]] = None,
        environment_variables: Optional[Mapping[str, str]] = None,
        job_key: Any = None,
        process_instance_key: Any = None,
    ):
        synthetic = {JOB_KEY: job_key, PROCESS_INSTANCE_KEY: process_instance_key}
        self._layers = tuple(
            MappingProxyType(dict(layer or {}))
            for layer in (synthetic, custom_headers, variables, environment_variables)
        )
        merged = {}
        for layer in reversed(self._layers):
            merged.update(layer)
        self._config = MappingProxyType(merged)

    @classmethod
    def from_invocation(cls, invocation: TaskInvocation, environment_variables: Mapping[str, str]):
        return cls(
            custom_headers=invocation.custom_headers,
            variables=invocation.variables,
            environment_variables=environment_variables,
            job_key=invocation.key,
            process_instance_key=invocation.process_instance_key,
        )

    @property
    def config(self) -> Mapping[str, Any]:
        """The merged view, as used for placeholder expansion."""
        return self._config

    def get(self, key: str) -> Optional[Any]:
        for layer in self._layers:
            if key in layer:
                return layer[key]
        return None

    def get_string_ignore_case(self, key: str) -> Optional[str]:
        wanted = key.lower()
        for layer in self._layers:
            for name, value in layer.items():
                if name.lower() == wanted:
                    return _non_empty_text(value)
        return None


def _non_empty_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return to_text(value) or None
