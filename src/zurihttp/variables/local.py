"""
local.py
--------
Implements LocalVariablesProvider, which takes the external variables from the
process environment. Only variables starting with the configured prefix
(compared case-insensitively) are used, and the prefix may be stripped from
their names.
"""
import os
from typing import Dict, Mapping, Optional

from .base import BaseVariablesProvider


class LocalVariablesProvider(BaseVariablesProvider):
    def __init__(self, prefix: str = "", remove_prefix: bool = True, environ: Optional[Mapping[str, str]] = None):
        self.prefix = prefix or ""
        self.remove_prefix = remove_prefix
        self._environ = environ

    def get_raw_variables(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def get_variables(self) -> Dict[str, str]:
        return {
            self._variable_name(key): value
            for key, value in self.get_raw_variables().items()
            if self._has_prefix(key)
        }

    def _has_prefix(self, key: str) -> bool:
        return key.upper().startswith(self.prefix.upper())

    def _variable_name(self, key: str) -> str:
        if self.remove_prefix:
            return key[len(self.prefix):]
        return key
