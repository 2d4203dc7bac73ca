import pytest

from zurihttp import variables
from zurihttp.variables import LocalVariablesProvider, RemoteVariablesProvider, get_variables_provider


@pytest.fixture(autouse=True)
def clear_provider_cache():
    get_variables_provider.cache_clear()
    yield
    get_variables_provider.cache_clear()


def test_local_provider_without_url(monkeypatch):
    monkeypatch.setattr(variables.settings, "ENV_VARS_URL", None)
    monkeypatch.setattr(variables.settings, "LOCAL_ENV_VARS_PREFIX", "MY_PREFIX_")

    provider = get_variables_provider()

    assert isinstance(provider, LocalVariablesProvider)
    assert provider.prefix == "MY_PREFIX_"


def test_remote_provider_with_url(monkeypatch):
    monkeypatch.setattr(variables.settings, "ENV_VARS_URL", "http://localhost:8089/config")
    monkeypatch.setattr(variables.settings, "ENV_VARS_RELOAD_RATE", 0)
    monkeypatch.setattr(variables.settings, "ENV_VARS_M2M_BASE_URL", "http://localhost:8089/token")

    provider = get_variables_provider()

    assert isinstance(provider, RemoteVariablesProvider)
    assert provider.url == "http://localhost:8089/config"
    assert provider.reload_interval == 0
    assert provider.requires_token
    assert provider.timeout == (variables.settings.CONNECTION_TIMEOUT, variables.settings.RESPONSE_TIMEOUT)


def test_provider_is_shared(monkeypatch):
    monkeypatch.setattr(variables.settings, "ENV_VARS_URL", None)
    assert get_variables_provider() is get_variables_provider()
