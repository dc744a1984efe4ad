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

"""Pydantic models for Ambari tool arguments and payloads."""

# Standard library imports
import json
import time
from datetime import datetime, timezone

# Third-party imports
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from typing import Annotated, Any, Dict, List, Literal, Optional, Union


def decode_json_argument(value: Any) -> Any:
    """Decode an argument that may arrive either structured or as a JSON-encoded string."""
    if isinstance(value, str):
        try:
            return json.loads(value)
        except json.JSONDecodeError as e:
            raise ValueError(f'Invalid JSON: {e.msg} at position {e.pos}') from e
    return value


JsonObject = Annotated[Dict[str, Any], BeforeValidator(decode_json_argument)]
JsonStringList = Annotated[List[str], BeforeValidator(decode_json_argument)]
JsonDefinitionList = Annotated[
    List[Union[int, Dict[str, Any]]], BeforeValidator(decode_json_argument)
]


class ToolArguments(BaseModel):
    """Base for tool argument models; unknown arguments are ignored."""

    model_config = ConfigDict(extra='ignore')


class CreateClusterArguments(ToolArguments):
    """Arguments for creating a cluster."""

    clusterName: str = Field(..., min_length=1)
    body: JsonObject


class UpdateAlertDefinitionArguments(ToolArguments):
    """Arguments for updating an alert definition."""

    clusterName: str = Field(..., min_length=1)
    definitionId: Union[int, str]
    enabled: Optional[bool] = None
    data: Optional[JsonObject] = None


class AlertGroupArguments(ToolArguments):
    """Arguments for creating or updating an alert group."""

    clusterName: str = Field(..., min_length=1)
    groupName: str = Field(..., min_length=1)
    groupId: Optional[int] = None
    definitions: Optional[JsonDefinitionList] = None


class NotificationArguments(ToolArguments):
    """Arguments for creating or updating an alert notification target."""

    clusterName: str = Field(..., min_length=1)
    notificationData: JsonObject
    targetId: Optional[int] = None


class RestartComponentsArguments(ToolArguments):
    """Arguments for restarting host components."""

    clusterName: str = Field(..., min_length=1)
    serviceName: str = Field(..., min_length=1)
    componentName: str = Field(..., min_length=1)
    hostNames: Optional[JsonStringList] = None
    context: Optional[str] = None


class RestartServiceArguments(ToolArguments):
    """Arguments for restarting a service."""

    clusterName: str = Field(..., min_length=1)
    serviceName: str = Field(..., min_length=1)
    context: Optional[str] = None
    restartType: Literal['RESTART', 'ROLLING_RESTART'] = 'RESTART'


class AlertSettingsArguments(ToolArguments):
    """Arguments for saving cluster-level alert settings."""

    clusterName: str = Field(..., min_length=1)
    alertRepeatTolerance: int = Field(..., ge=0)


class DuplicateAlertGroupArguments(ToolArguments):
    """Arguments for duplicating an alert group."""

    clusterName: str = Field(..., min_length=1)
    sourceGroupId: int
    newGroupName: str = Field(..., min_length=1)


def extract_definition_ids(definitions: Optional[List[Any]]) -> List[int]:
    """Extract numeric definition IDs from raw IDs or objects exposing an ``id`` field.

    Entries that are neither are skipped.
    """
    ids: List[int] = []
    for definition in definitions or []:
        if isinstance(definition, bool):
            continue
        if isinstance(definition, (int, float)):
            ids.append(int(definition))
        elif isinstance(definition, dict) and 'id' in definition:
            try:
                ids.append(int(definition['id']))
            except (TypeError, ValueError):
                continue
    return ids


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC timestamp with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def cache_buster() -> int:
    """Millisecond timestamp sent as the ``_`` parameter on live-data queries."""
    return int(time.time() * 1000)
