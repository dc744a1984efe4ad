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

"""Ambari MCP Server implementation."""

# Standard library imports
import json
import time

# Local imports
from .ambari_client import AmbariClient
from .catalog import TOOL_DEFINITIONS
from .config import AmbariConfig, load_config
from .errors import (
    AmbariApiError,
    InputValidationError,
    internal_error,
    invalid_request,
    method_not_found,
)
from .models import utc_timestamp
from .resources import JSON_MIME_TYPE, RESOURCE_TEMPLATES, RESOURCES, ResourceHandler
from .tools import TOOL_EXECUTORS, Executor

# Third-party imports
from loguru import logger
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.shared.exceptions import McpError
from mcp.types import CallToolResult, Resource, ResourceTemplate, TextContent, Tool
from pydantic import AnyUrl, ValidationError
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union


SERVER_NAME = 'ambari-mcp-server'


def is_read_only_tool(tool: Tool) -> bool:
    """True when the tool is annotated as free of side effects."""
    return bool(tool.annotations and tool.annotations.readOnlyHint)


def create_error_response(error: McpError) -> List[TextContent]:
    """Create standardized error response."""
    payload = {
        'error': True,
        'code': error.error.code,
        'message': error.error.message,
        'data': error.error.data,
    }
    return [TextContent(type='text', text=json.dumps(payload, indent=2, default=str))]


def create_success_response(data: Any) -> List[TextContent]:
    """Create standardized success response."""
    return [TextContent(type='text', text=json.dumps(data, indent=2, default=str))]


class ToolDispatcher:
    """Looks up tool executors, runs them and wraps their results."""

    def __init__(
        self,
        ambari_client: AmbariClient,
        read_only: bool = False,
        tools: Optional[Sequence[Tool]] = None,
        executors: Optional[Mapping[str, Executor]] = None,
    ):
        """Initialize the dispatcher with the tool catalog and executor registry."""
        self.client = ambari_client
        self.read_only = read_only
        self.tools = {tool.name: tool for tool in (TOOL_DEFINITIONS if tools is None else tools)}
        self.executors = dict(TOOL_EXECUTORS if executors is None else executors)

    def list_tools(self) -> List[Tool]:
        """Return the tools callable in the current mode."""
        tools = list(self.tools.values())
        if self.read_only:
            return [tool for tool in tools if is_read_only_tool(tool)]
        return tools

    async def invoke(self, name: str, arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Run tool ``name`` and return ``{tool, executionTimeMs, timestamp, result}``.

        Every failure is raised as an ``McpError``: unknown tools and tools
        hidden by read-only mode as METHOD_NOT_FOUND, bad arguments as
        INVALID_REQUEST and everything else as INTERNAL_ERROR.
        """
        executor = self.executors.get(name)
        if executor is None:
            raise method_not_found(
                f'Unknown tool: {name}. Available tools: {", ".join(self.executors)}'
            )

        tool = self.tools.get(name)
        if tool is None:
            raise internal_error(f'Tool {name} executor exists but tool definition is missing')

        if self.read_only and not is_read_only_tool(tool):
            logger.warning(f'Read-only mode violation attempt: {name}')
            raise method_not_found(
                f'Tool {name} not available in read-only mode. '
                'Remove --readonly flag to enable write operations.'
            )

        start = time.perf_counter()
        try:
            result = await executor(self.client, arguments or {})
        except McpError:
            raise
        except ValidationError as e:
            logger.warning(f'Validation error in {name}: {e}')
            raise invalid_request(
                f'Invalid arguments for {name}: {e.error_count()} validation error(s)',
                {'tool': name, 'errors': e.errors(include_url=False, include_context=False)},
            ) from e
        except InputValidationError as e:
            logger.warning(f'Validation error in {name}: {e}')
            raise invalid_request(str(e), {'tool': name}) from e
        except AmbariApiError as e:
            raise e.to_mcp_error() from e
        except Exception as e:
            logger.exception('Unexpected error in tool call', tool=name)
            raise internal_error(
                f'Tool execution failed for {name}: {e}', {'tool': name, 'originalError': str(e)}
            ) from e
        execution_time_ms = round((time.perf_counter() - start) * 1000)

        return {
            'tool': name,
            'executionTimeMs': execution_time_ms,
            'timestamp': utc_timestamp(),
            'result': result,
        }


def create_ambari_server(config: Optional[AmbariConfig] = None, read_only: bool = False) -> Server:
    """Create and configure the Ambari MCP server."""
    server = Server(SERVER_NAME)
    ambari_client = AmbariClient(config or load_config())
    dispatcher = ToolDispatcher(ambari_client, read_only=read_only)
    resource_handler = ResourceHandler(ambari_client)

    @server.list_tools()
    async def handle_list_tools() -> List[Tool]:
        """List available Ambari tools."""
        return dispatcher.list_tools()

    @server.call_tool()
    async def handle_call_tool(
        name: str, arguments: Dict[str, Any]
    ) -> Union[Sequence[TextContent], CallToolResult]:
        """Handle tool calls using dispatch pattern."""
        try:
            return create_success_response(await dispatcher.invoke(name, arguments))
        except McpError as e:
            return CallToolResult(content=create_error_response(e), isError=True)

    @server.list_resources()
    async def handle_list_resources() -> List[Resource]:
        """List the fixed Ambari resources."""
        return RESOURCES

    @server.list_resource_templates()
    async def handle_list_resource_templates() -> List[ResourceTemplate]:
        """List the parameterized Ambari resources."""
        return RESOURCE_TEMPLATES

    @server.read_resource()
    async def handle_read_resource(uri: AnyUrl) -> Iterable[ReadResourceContents]:
        """Read an Ambari resource as JSON."""
        content = await resource_handler.read(str(uri))
        return [
            ReadResourceContents(
                content=json.dumps(content, indent=2, default=str), mime_type=JSON_MIME_TYPE
            )
        ]

    return server
