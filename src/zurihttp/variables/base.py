"""
base.py
-------
Defines the BaseVariablesProvider interface. A provider supplies the externally
managed variables layered underneath the task headers and job variables.
"""
from typing import Dict


class ConfigurationLoadError(Exception):
    pass


class BaseVariablesProvider:
    def get_variables(self) -> Dict[str, str]:
        raise NotImplementedError
