# Re-export the providers and pick the one configured for this process
from functools import lru_cache

from .base import BaseVariablesProvider, ConfigurationLoadError
from .local import LocalVariablesProvider
from .remote import RemoteVariablesProvider, TokenRequestError
from ..config import settings


@lru_cache(maxsize=None)
def get_variables_provider() -> BaseVariablesProvider:
    """
    One provider per process, so the remote cache and M2M token are shared by
    every job handled here.
    """
    if settings.ENV_VARS_URL:
        return RemoteVariablesProvider(
            settings.ENV_VARS_URL,
            reload_interval_ms=settings.ENV_VARS_RELOAD_RATE,
            m2m_base_url=settings.ENV_VARS_M2M_BASE_URL,
            m2m_client_id=settings.ENV_VARS_M2M_CLIENT_ID,
            m2m_client_secret=settings.ENV_VARS_M2M_CLIENT_SECRET,
            m2m_audience=settings.ENV_VARS_M2M_AUDIENCE,
            timeout=(settings.CONNECTION_TIMEOUT, settings.RESPONSE_TIMEOUT),
        )
    return LocalVariablesProvider(
        prefix=settings.LOCAL_ENV_VARS_PREFIX,
        remove_prefix=settings.LOCAL_ENV_VARS_REMOVE_PREFIX,
    )
