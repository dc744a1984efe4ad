# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Client for the Apache Ambari REST API."""

# Standard library imports
import errno
import re

import httpx

# Local imports
from . import __user_agent__
from .config import AmbariConfig
from .errors import AmbariApiError

# Third-party imports
from loguru import logger
from typing import Any, Dict, Mapping, Optional, Tuple


SUPPORTED_METHODS = frozenset({'GET', 'POST', 'PUT', 'DELETE'})
BODY_METHODS = frozenset({'POST', 'PUT'})

REQUESTED_BY = 'ambari-mcp-server'
DEFAULT_HEADERS = {
    'Content-Type': 'application/json',
    'User-Agent': __user_agent__,
    'X-Requested-By': REQUESTED_BY,
}

TIMEOUT_CODES = frozenset({'ETIMEDOUT', 'ECONNABORTED', 'ESOCKETTIMEDOUT'})
TIMEOUT_PATTERN = re.compile(r'timed?\s*out', re.IGNORECASE)


def strip_empty_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop query parameters whose value is None, an empty string or an empty collection."""
    if not params:
        return {}
    return {key: value for key, value in params.items() if not _is_empty(value)}


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


def _parse_body(response: httpx.Response) -> Any:
    """Return the JSON body, the raw text for non-JSON bodies, or None when empty."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def error_code(exc: BaseException) -> Optional[str]:
    """Find a symbolic connection code (ECONNREFUSED, ETIMEDOUT, ...) for a transport error."""
    if isinstance(exc, httpx.TimeoutException):
        return 'ETIMEDOUT'

    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, OSError) and current.errno:
            return errno.errorcode.get(current.errno, str(current.errno))
        current = current.__cause__ or current.__context__
    return None


def is_timeout(code: Optional[str], message: Optional[str]) -> bool:
    """Classify a failure as a timeout by its code first, then by its message."""
    if code in TIMEOUT_CODES:
        return True
    return bool(message and TIMEOUT_PATTERN.search(message))


def build_summary(
    method: str,
    url: str,
    status: Optional[int] = None,
    status_text: Optional[str] = None,
    code: Optional[str] = None,
    timeout: bool = False,
) -> str:
    """Join the request line with exactly one cause tag."""
    if status:
        cause = f'HTTP {status} {status_text}' if status_text else f'HTTP {status}'
    elif code:
        cause = f'Code {code}'
    elif timeout:
        cause = 'Timeout'
    else:
        cause = 'No response'
    return f'{method} {url} | {cause}'


class AmbariClient:
    """Issues authenticated requests against the Ambari REST API.

    Every call is a fresh attempt: there is no retry and no caching. Success
    is returned as ``{'status', 'statusText', 'data'}``; every failure is
    raised as :class:`AmbariApiError`.
    """

    def __init__(self, config: AmbariConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the client with static connection settings."""
        self.config = config
        self._transport = transport

    @property
    def base_url(self) -> str:
        """Base URL every request path is appended to."""
        return self.config.base_url

    def _build_request(
        self, method: str, path: str, params: Optional[Mapping[str, Any]]
    ) -> Tuple[str, str, Dict[str, Any]]:
        method_upper = method.upper()
        if method_upper not in SUPPORTED_METHODS:
            raise ValueError(f'Unsupported HTTP method: {method}')
        return method_upper, f'{self.base_url}{path}', strip_empty_params(params)

    async def execute(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> Dict[str, Any]:
        """Execute one Ambari API call."""
        method_upper, url, query = self._build_request(method, path, params)

        request_kwargs: Dict[str, Any] = {'params': query or None}
        if method_upper in BODY_METHODS and body is not None:
            request_kwargs['json'] = body

        logger.debug(f'{method_upper} {url} params={query}')

        try:
            async with httpx.AsyncClient(
                auth=httpx.BasicAuth(self.config.username, self.config.password),
                headers=DEFAULT_HEADERS,
                timeout=self.config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.request(method_upper, url, **request_kwargs)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise self._transport_error(method_upper, url, query, e) from e

        if not response.is_success:
            raise self._status_error(method_upper, url, query, response)

        return {
            'status': response.status_code,
            'statusText': response.reason_phrase,
            'data': _parse_body(response),
        }

    def _diagnostics(self, method: str, url: str, query: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'url': url,
            'method': method,
            'params': query or None,
            'timeoutMs': self.config.timeout_ms,
            'code': None,
            'status': None,
            'statusText': None,
        }

    def _status_error(
        self, method: str, url: str, query: Dict[str, Any], response: httpx.Response
    ) -> AmbariApiError:
        diagnostics = self._diagnostics(method, url, query)
        diagnostics['status'] = response.status_code
        diagnostics['statusText'] = response.reason_phrase
        body = _parse_body(response)
        if body:
            diagnostics['responseBody'] = body

        summary = build_summary(
            method, url, status=response.status_code, status_text=response.reason_phrase
        )
        logger.error(f'Ambari API Error: {summary}')
        return AmbariApiError(summary, diagnostics)

    def _transport_error(
        self, method: str, url: str, query: Dict[str, Any], exc: Exception
    ) -> AmbariApiError:
        code = error_code(exc)
        message = str(exc)
        timeout = is_timeout(code, message)

        diagnostics = self._diagnostics(method, url, query)
        diagnostics['code'] = code
        if timeout:
            diagnostics['timeout'] = True
        if message and message != type(exc).__name__:
            diagnostics['message'] = message

        summary = build_summary(method, url, code=code, timeout=timeout)
        logger.error(f'Ambari API Error: {summary}')
        return AmbariApiError(summary, diagnostics)
