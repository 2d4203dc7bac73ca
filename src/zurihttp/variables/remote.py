"""
remote.py
---------
Implements RemoteVariablesProvider, which loads the external variables from a
configured URL. The endpoint answers with a JSON list of {"key", "value"}
records; the resulting map is cached for the reload interval.

If an M2M token endpoint is configured, every request carries an
Authorization header. The token is obtained with a client-credentials exchange
and refreshed once when the configuration endpoint answers 401 or 403.

The cache and the token are shared by all jobs of the process, so reads and
writes of both happen under one lock.
"""
import logging
import threading
import time
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..utils.placeholders import to_text
from .base import BaseVariablesProvider, ConfigurationLoadError

logger = logging.getLogger(__name__)

UNAUTHORIZED_STATUS_CODES = (401, 403)


class TokenRequestError(ConfigurationLoadError):
    pass


class WorkerVariable(BaseModel):
    key: str
    value: Any = None


class M2mToken(BaseModel):
    token_type: str
    access_token: str

    def header_value(self) -> str:
        return f"{self.token_type} {self.access_token}"


_worker_variables = TypeAdapter(List[WorkerVariable])


class RemoteVariablesProvider(BaseVariablesProvider):
    def __init__(
        self,
        url: Optional[str],
        reload_interval_ms: int = 15000,
        m2m_base_url: Optional[str] = None,
        m2m_client_id: Optional[str] = None,
        m2m_client_secret: Optional[str] = None,
        m2m_audience: Optional[str] = None,
        timeout: Optional[Tuple[float, float]] = None,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.url = url
        self.reload_interval = reload_interval_ms / 1000.0
        self.m2m_base_url = m2m_base_url
        self.m2m_client_id = m2m_client_id
        self.m2m_client_secret = m2m_client_secret
        self.m2m_audience = m2m_audience
        self.timeout = timeout
        self.session = session or requests.Session()
        self._clock = clock

        self._lock = threading.Lock()
        self._cached_variables: Optional[Dict[str, str]] = None
        self._last_update: Optional[float] = None
        # Empty until first needed, and again after the endpoint rejected it
        self._m2m_token = ""

    @property
    def requires_token(self) -> bool:
        return bool(self.m2m_base_url)

    def get_variables(self) -> Dict[str, str]:
        if not self.url:
            return {}
        with self._lock:
            if self._is_cache_fresh():
                return dict(self._cached_variables)
            return dict(self._reload())

    def _is_cache_fresh(self) -> bool:
        if self._cached_variables is None or self._last_update is None:
            return False
        return self._clock() - self._last_update < self.reload_interval

    def _reload(self) -> Dict[str, str]:
        try:
            response = self._request_variables()
            if response.status_code in UNAUTHORIZED_STATUS_CODES:
                logger.info("Variables endpoint answered %s, requesting a new token", response.status_code)
                self._m2m_token = ""
                response = self._request_variables()
            if response.status_code != 200:
                raise ConfigurationLoadError(
                    f"Could not load variables successfully, HTTP response with status "
                    f"{response.status_code}: {response.text}"
                )
            variables = self._parse_variables(response.text)
        except ConfigurationLoadError:
            raise
        except (requests.RequestException, ValueError) as e:
            raise ConfigurationLoadError(f"Could not load variables from '{self.url}': {e}") from e

        self._cached_variables = variables
        self._last_update = self._clock()
        logger.debug("Loaded %d variables from %s", len(variables), self.url)
        return variables

    def _request_variables(self) -> requests.Response:
        headers = {"Accept": "application/json"}
        if self.requires_token:
            if not self._m2m_token:
                self._m2m_token = self._request_token()
            headers["Authorization"] = self._m2m_token
        return self.session.get(self.url, headers=headers, timeout=self.timeout)

    def _request_token(self) -> str:
        payload = {
            "client_id": self.m2m_client_id,
            "client_secret": self.m2m_client_secret,
            "audience": self.m2m_audience,
            "grant_type": "client_credentials",
        }
        try:
            response = self.session.post(
                self.m2m_base_url,
                json=payload,
                headers={"Accept": "application/json", "Content-Type": "application/json"},
                timeout=self.timeout,
            )
            if response.status_code != 200:
                raise TokenRequestError(
                    f"Token request to '{self.m2m_base_url}' failed with status {response.status_code}"
                )
            token = M2mToken.model_validate_json(response.text)
        except (requests.RequestException, ValidationError) as e:
            raise TokenRequestError(f"Could not obtain token from '{self.m2m_base_url}': {e}") from e
        logger.info("Obtained new M2M token from %s", self.m2m_base_url)
        return token.header_value()

    @staticmethod
    def _parse_variables(body: Optional[str]) -> Dict[str, str]:
        if not body or not body.strip():
            return {}
        return {record.key: to_text(record.value) for record in _worker_variables.validate_json(body)}
