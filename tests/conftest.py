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

"""Test fixtures for Ambari MCP Server tests."""

import pytest
from awslabs.ambari_mcp_server.config import AmbariConfig
from unittest.mock import AsyncMock


BASE_URL = 'http://ambari.test:8080/api/v1'


def ok(data=None, status=200, status_text='OK'):
    """Build a successful gateway envelope."""
    return {'status': status, 'statusText': status_text, 'data': data}


@pytest.fixture
def ambari_config():
    """Connection settings pointing at a fake Ambari server."""
    return AmbariConfig(
        base_url=BASE_URL,
        username='admin',
        password='secret',  # pragma: allowlist secret
        timeout_ms=5000,
    )


@pytest.fixture
def mock_client():
    """Ambari client double whose execute() returns an empty success envelope."""
    client = AsyncMock()
    client.execute.return_value = ok({'items': []})
    return client
