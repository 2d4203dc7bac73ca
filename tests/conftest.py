import json
from unittest.mock import MagicMock

import pytest
import requests

from zurihttp.models import TaskInvocation
from zurihttp.variables import LocalVariablesProvider


def make_response(status_code=200, body="", content_type=None):
    response = requests.Response()
    response.status_code = status_code
    if not isinstance(body, str):
        body = json.dumps(body)
    response._content = body.encode("utf-8")
    response.encoding = "utf-8"
    if content_type:
        response.headers["Content-Type"] = content_type
    return response


class StaticVariablesProvider(LocalVariablesProvider):
    def __init__(self, variables=None):
        super().__init__(prefix="", remove_prefix=False, environ=variables or {})


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def invocation_factory():
    def _factory(custom_headers=None, variables=None, retries=3):
        return TaskInvocation(
            key=2251799813685249,
            process_instance_key=2251799813685200,
            custom_headers=custom_headers or {},
            variables=variables or {},
            retries=retries,
        )
    return _factory
