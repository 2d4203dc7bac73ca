"""
http_exec.py
------------
Implements HTTPExecutor, which performs one HTTP request per job and maps the
response onto a broker outcome.

Request parameters are looked up (case-insensitively) in the job configuration
and may contain placeholders:

    url             required
    method          default GET
    body            a string is expanded, anything else is sent as JSON
    authorization   value of the Authorization header
    contentType     default application/json
    accept          default application/json

The response status is classified with `statusCodeFailure` (default
3xx,4xx,5xx) and `statusCodeCompletion` (default 1xx,2xx). Failure wins when
both match; when neither matches the job is left pending. On failure the error
code and message are read from the body with `errorCodePath` and
`errorMessagePath`.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ..config import settings
from ..models import Complete, Fail, Outcome, Pending, TaskInvocation, ThrowError
from ..overlay import ConfigurationOverlay
from ..utils import json_pointer, placeholders, status_codes
from ..variables import BaseVariablesProvider, get_variables_provider
from .base import BaseExecutor

logger = logging.getLogger(__name__)

CONNECTION_TIMEOUT = settings.CONNECTION_TIMEOUT
RESPONSE_TIMEOUT = settings.RESPONSE_TIMEOUT

PARAMETER_URL = "url"
PARAMETER_METHOD = "method"
PARAMETER_BODY = "body"
PARAMETER_AUTHORIZATION = "authorization"
PARAMETER_CONTENT_TYPE = "contentType"
PARAMETER_ACCEPT = "accept"
PARAMETER_STATUS_CODE_COMPLETION = "statusCodeCompletion"
PARAMETER_STATUS_CODE_FAILURE = "statusCodeFailure"
PARAMETER_ERROR_CODE_PATH = "errorCodePath"
PARAMETER_ERROR_MESSAGE_PATH = "errorMessagePath"

DEFAULT_METHOD = "GET"
APPLICATION_JSON = "application/json"
TEXT_PLAIN = "text/plain"


class MissingParameterError(Exception):
    pass


@dataclass(frozen=True)
class ResolvedRequest:
    url: str
    method: str = DEFAULT_METHOD
    body: Optional[str] = None
    authorization: Optional[str] = None
    content_type: str = APPLICATION_JSON
    accept: str = APPLICATION_JSON

    @property
    def headers(self) -> Dict[str, str]:
        headers = {"Content-Type": self.content_type, "Accept": self.accept}
        if self.authorization:
            headers["Authorization"] = self.authorization
        return headers


def is_plain_text(media_type: Optional[str]) -> bool:
    return bool(media_type) and TEXT_PLAIN in media_type.lower()


class HTTPExecutor(BaseExecutor):
    def __init__(
        self,
        variables_provider: Optional[BaseVariablesProvider] = None,
        session: Optional[requests.Session] = None,
    ):
        self.variables_provider = variables_provider or get_variables_provider()
        self.session = session or requests.Session()

    def execute(self, invocation: TaskInvocation) -> Outcome:
        overlay = ConfigurationOverlay.from_invocation(invocation, self.variables_provider.get_variables())

        try:
            request = self.build_request(overlay)
        except (MissingParameterError, placeholders.TemplateError) as e:
            logger.error("Job %s cannot be executed: %s", invocation.key, e)
            return Fail(error_message=str(e), retries=0)

        try:
            response = self.send(request)
        except requests.RequestException as e:
            # Left to the broker's redelivery, no retry here
            logger.warning("Request %s %s for job %s failed: %s", request.method, request.url, invocation.key, e)
            return Fail(
                error_message=f"Request {request.method} {request.url} failed: {e}",
                retries=_decrement(invocation.retries),
            )

        return self.process_response(invocation, overlay, request, response)

    # Request

    def build_request(self, overlay: ConfigurationOverlay) -> ResolvedRequest:
        context = overlay.config

        url = placeholders.expand(overlay.get_string_ignore_case(PARAMETER_URL), context)
        if not url:
            raise MissingParameterError(f"Missing required parameter: {PARAMETER_URL}")

        method = placeholders.expand(overlay.get_string_ignore_case(PARAMETER_METHOD), context)
        return ResolvedRequest(
            url=url,
            method=(method or DEFAULT_METHOD).upper(),
            body=self.resolve_body(overlay),
            authorization=placeholders.expand(overlay.get_string_ignore_case(PARAMETER_AUTHORIZATION), context),
            content_type=placeholders.expand(overlay.get_string_ignore_case(PARAMETER_CONTENT_TYPE), context)
            or APPLICATION_JSON,
            accept=placeholders.expand(overlay.get_string_ignore_case(PARAMETER_ACCEPT), context) or APPLICATION_JSON,
        )

    @staticmethod
    def resolve_body(overlay: ConfigurationOverlay) -> Optional[str]:
        body = overlay.get(PARAMETER_BODY)
        if body is None:
            return None
        if isinstance(body, str):
            return placeholders.expand(body, overlay.config)
        return json.dumps(body)

    def send(self, request: ResolvedRequest) -> requests.Response:
        logger.debug("Sending %s %s", request.method, request.url)
        return self.session.request(
            request.method,
            request.url,
            data=request.body.encode("utf-8") if request.body is not None else None,
            headers=request.headers,
            timeout=(CONNECTION_TIMEOUT, RESPONSE_TIMEOUT),
        )

    # Response

    def process_response(
        self,
        invocation: TaskInvocation,
        overlay: ConfigurationOverlay,
        request: ResolvedRequest,
        response: requests.Response,
    ) -> Outcome:
        status_code = response.status_code
        failure = overlay.get_string_ignore_case(PARAMETER_STATUS_CODE_FAILURE) or status_codes.DEFAULT_STATUS_CODE_FAILURE
        completion = (
            overlay.get_string_ignore_case(PARAMETER_STATUS_CODE_COMPLETION)
            or status_codes.DEFAULT_STATUS_CODE_COMPLETION
        )

        if status_codes.matches(status_code, failure):
            return self.failure_outcome(invocation, overlay, response)
        if status_codes.matches(status_code, completion):
            return Complete(variables=self.result_variables(request, response))

        logger.info("Job %s left open, status %s matches no completion or failure pattern", invocation.key, status_code)
        return Pending()

    @staticmethod
    def failure_outcome(
        invocation: TaskInvocation, overlay: ConfigurationOverlay, response: requests.Response
    ) -> Outcome:
        body = response.text
        error_code = json_pointer.extract_text(body, overlay.get_string_ignore_case(PARAMETER_ERROR_CODE_PATH))
        error_message = json_pointer.extract_text(body, overlay.get_string_ignore_case(PARAMETER_ERROR_MESSAGE_PATH))
        message = error_message or f"HTTP request failed with {response.status_code}: {body}"

        if error_code:
            return ThrowError(error_code=error_code, error_message=message)
        # TODO: take the retry policy from the task headers instead of always spending one
        return Fail(error_message=message, retries=_decrement(invocation.retries))

    @staticmethod
    def result_variables(request: ResolvedRequest, response: requests.Response) -> Dict[str, Any]:
        result: Dict[str, Any] = {"statusCode": response.status_code}
        body = response.text
        if not body:
            return result

        if is_plain_text(request.accept) and is_plain_text(response.headers.get("Content-Type")):
            result["body"] = body
            return result
        try:
            result["body"] = json.loads(body)
        except ValueError:
            logger.warning("Response body of %s %s is not valid JSON, dropping it", request.method, request.url)
        return result


def _decrement(retries: int) -> int:
    return max(retries - 1, 0)
