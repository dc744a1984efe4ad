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

"""Error types shared by the Ambari gateway, resource handlers and tool dispatcher."""

from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND, ErrorData
from typing import Any, Dict, Optional


class AmbariApiError(Exception):
    """Raised for every failed call to the Ambari REST API.

    ``summary`` names the method, the URL and one cause tag (HTTP status,
    connection code, timeout or missing response). ``diagnostics`` holds the
    machine-readable details of the failed request.
    """

    def __init__(self, summary: str, diagnostics: Dict[str, Any]):
        """Initialize the error with its summary line and diagnostics."""
        self.summary = summary
        self.diagnostics = diagnostics
        super().__init__(f'Ambari API Error: {summary}')

    def to_mcp_error(self) -> McpError:
        """Convert to an MCP internal error carrying the diagnostics."""
        return internal_error(str(self), {'diagnostics': self.diagnostics})


class InputValidationError(ValueError):
    """Raised when tool arguments cannot be turned into a valid request."""

    pass


def invalid_request(message: str, data: Optional[Dict[str, Any]] = None) -> McpError:
    """Build an MCP invalid-request error."""
    return McpError(ErrorData(code=INVALID_REQUEST, message=message, data=data))


def method_not_found(message: str, data: Optional[Dict[str, Any]] = None) -> McpError:
    """Build an MCP method-not-found error."""
    return McpError(ErrorData(code=METHOD_NOT_FOUND, message=message, data=data))


def internal_error(message: str, data: Optional[Dict[str, Any]] = None) -> McpError:
    """Build an MCP internal error."""
    return McpError(ErrorData(code=INTERNAL_ERROR, message=message, data=data))
