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

"""Static catalog of the Ambari tools published over MCP.

The catalog is data only: names, descriptions, JSON Schemas and annotations.
Executors are registered separately in ``tools.py``.
"""

from mcp.types import Tool, ToolAnnotations
from typing import Any, Dict, Iterable, List, Optional


def _string(description: str, **extra: Any) -> Dict[str, Any]:
    return {'type': 'string', 'description': description, **extra}


def _integer(description: str, **extra: Any) -> Dict[str, Any]:
    return {'type': 'integer', 'description': description, **extra}


def _boolean(description: str, **extra: Any) -> Dict[str, Any]:
    return {'type': 'boolean', 'description': description, **extra}


CLUSTER_NAME = _string('The name of the cluster')
SERVICE_NAME = _string('The name of the service')
PAGE_SIZE = _integer('The number of resources to be returned for the paged response.', default=10)
SORT_BY = _string('Sort resources in result by (asc | desc)')
GROUP_ID = _integer('The alert group ID')
TARGET_ID = _integer('The notification target ID')
DEFINITIONS = _string('JSON array of definition IDs to include in the group (optional)')
REQUEST_ID = _string('Filter by specific request ID (optional)')
SERVICE_FILTER = _string('Filter by specific service name (optional)')
COMPONENT_NAME_OPTIONAL = _string(
    'The name of the component (optional - applies to entire service if not provided)'
)
HOST_NAME_FOR_COMPONENT = _string('The name of the host (required if componentName is provided)')


def _tool(
    name: str,
    description: str,
    properties: Dict[str, Any],
    required: Iterable[str] = (),
    read_only: bool = True,
    destructive: bool = False,
) -> Tool:
    return Tool(
        name=name,
        description=description,
        inputSchema={'type': 'object', 'properties': properties, 'required': list(required)},
        annotations=ToolAnnotations(
            readOnlyHint=read_only,
            destructiveHint=destructive if not read_only else None,
        ),
    )


CLUSTER_TOOLS: List[Tool] = [
    _tool(
        'ambari_clusters_getclusters',
        'Returns all clusters',
        {
            'fields': _string(
                'Filter fields in the response (identifier fields are mandatory)',
                default='Clusters/*',
            ),
            'sortBy': SORT_BY,
            'page_size': PAGE_SIZE,
            'from': _integer(
                'The starting page resource (inclusive). "start" is also accepted.', default=0
            ),
            'to': _integer('The ending page resource (inclusive). "end" is also accepted.'),
        },
    ),
    _tool(
        'ambari_clusters_getcluster',
        'Returns information about a specific cluster',
        {
            'clusterName': CLUSTER_NAME,
            'fields': _string(
                'Filter fields in the response (identifier fields are mandatory)',
                default='Clusters/*',
            ),
        },
        required=['clusterName'],
    ),
    _tool(
        'ambari_clusters_createcluster',
        'Creates a cluster',
        {
            'clusterName': _string('The name of the cluster to create'),
            'body': _string('JSON body for cluster creation'),
        },
        required=['clusterName', 'body'],
        read_only=False,
    ),
]

HOST_TOOLS: List[Tool] = [
    _tool(
        'ambari_hosts_gethosts',
        'Returns a collection of all hosts',
        {
            'fields': _string('Filter fields in the response', default='Hosts/*'),
            'sortBy': _string(
                'Sort resources in result by (asc | desc)', default='Hosts/host_name.asc'
            ),
            'page_size': PAGE_SIZE,
        },
    ),
    _tool(
        'ambari_hosts_gethost',
        'Returns information about a single host',
        {
            'hostName': _string('The name of the host'),
            'fields': _string('Filter fields in the response', default='Hosts/*'),
        },
        required=['hostName'],
    ),
]

ALERT_TOOLS: List[Tool] = [
    _tool(
        'ambari_alerts_gettargets',
        'Returns all alert targets',
        {
            'fields': _string('Filter fields in the response', default='AlertTarget/*'),
            'sortBy': SORT_BY,
            'page_size': PAGE_SIZE,
        },
    ),
    _tool(
        'ambari_alerts_getalerts',
        'Get all alerts for a cluster with filtering options',
        {
            'clusterName': CLUSTER_NAME,
            'fields': _string('Filter fields in the response', default='*'),
            'hostName': _string('Filter alerts by host name (optional)'),
            'componentName': _string('Filter alerts by component name (optional)'),
            'state': _string('Filter alerts by state (CRITICAL, WARNING, OK, UNKNOWN)'),
            'maintenanceState': _string('Filter alerts by maintenance state (ON, OFF)'),
        },
        required=['clusterName'],
    ),
    _tool(
        'ambari_alerts_getalertsummary',
        'Get alert summary in grouped format for a cluster',
        {
            'clusterName': CLUSTER_NAME,
            'maintenanceFilter': _boolean('Filter out alerts in maintenance mode', default=False),
        },
        required=['clusterName'],
    ),
    _tool(
        'ambari_alerts_getalertdetails',
        'Get details for a specific alert definition',
        {'clusterName': CLUSTER_NAME, 'alertId': _string('The alert definition ID')},
        required=['clusterName', 'alertId'],
    ),
    _tool(
        'ambari_alerts_getalertdefinitions',
        'Get all alert definitions for a cluster',
        {
            'clusterName': CLUSTER_NAME,
            'fields': _string('Filter fields in the response', default='*'),
        },
        required=['clusterName'],
    ),
    _tool(
        'ambari_alerts_updatealertdefinition',
        'Update an alert definition (enable/disable or modify properties)',
        {
            'clusterName': CLUSTER_NAME,
            'definitionId': _string('The alert definition ID'),
            'enabled': _boolean('Enable or disable the alert definition (optional)'),
            'data': _string('JSON string of additional properties to update (optional)'),
        },
        required=['clusterName', 'definitionId'],
        read_only=False,
    ),
    _tool(
        'ambari_alerts_getalertgroups',
        'Get all alert groups for a cluster',
        {'clusterName': CLUSTER_NAME},
        required=['clusterName'],
    ),
    _tool(
        'ambari_alerts_createalertgroup',
        'Create a new alert group',
        {
            'clusterName': CLUSTER_NAME,
            'groupName': _string('Name of the alert group'),
            'definitions': DEFINITIONS,
        },
        required=['clusterName', 'groupName'],
        read_only=False,
    ),
    _tool(
        'ambari_alerts_updatealertgroup',
        'Update an existing alert group',
        {
            'clusterName': CLUSTER_NAME,
            'groupId': GROUP_ID,
            'groupName': _string('New name for the alert group'),
            'definitions': DEFINITIONS,
        },
        required=['clusterName', 'groupId', 'groupName'],
        read_only=False,
    ),
    _tool(
        'ambari_alerts_deletealertgroup',
        'Delete an alert group',
        {'clusterName': CLUSTER_NAME, 'groupId': _integer('The alert group ID to delete')},
        required=['clusterName', 'groupId'],
        read_only=False,
        destructive=True,
    ),
    _tool(
        'ambari_alerts_duplicatealertgroup',
        'Duplicate an existing alert group with a new name',
        {
            'clusterName': CLUSTER_NAME,
            'sourceGroupId': _integer('The ID of the alert group to duplicate'),
            'newGroupName': _string('Name for the new duplicated group'),
        },
        required=['clusterName', 'sourceGroupId', 'newGroupName'],
        read_only=False,
    ),
    _tool(
        'ambari_alerts_adddefinitiontogroup',
        'Add an alert definition to an alert group',
        {
            'clusterName': CLUSTER_NAME,
            'groupId': GROUP_ID,
            'definitionId': _integer('The alert definition ID to add'),
        },
        required=['clusterName', 'groupId', 'definitionId'],
        read_only=False,
    ),
    _tool(
        'ambari_alerts_removedefinitionfromgroup',
        'Remove an alert definition from an alert group',
        {
            'clusterName': CLUSTER_NAME,
            'groupId': GROUP_ID,
            'definitionId': _integer('The alert definition ID to remove'),
        },
        required=['clusterName', 'groupId', 'definitionId'],
        read_only=False,
        destructive=True,
    ),
    _tool(
        'ambari_alerts_getnotifications',
        'Get all alert notification targets',
        {'clusterName': CLUSTER_NAME},
        required=['clusterName'],
    ),
    _tool(
        'ambari_alerts_createnotification',
        'Create a new alert notification target',
        {
            'clusterName': CLUSTER_NAME,
            'notificationData': _string(
                'JSON string containing notification target data '
                '(name, description, notification_type, properties, etc.)'
            ),
        },
        required=['clusterName', 'notificationData'],
        read_only=False,
    ),
    _tool(
        'ambari_alerts_updatenotification',
        'Update an existing alert notification target',
        {
            'clusterName': CLUSTER_NAME,
            'targetId': TARGET_ID,
            'notificationData': _string('JSON string containing updated notification target data'),
        },
        required=['clusterName', 'targetId', 'notificationData'],
        read_only=False,
    ),
    _tool(
        'ambari_alerts_deletenotification',
        'Delete an alert notification target',
        {
            'clusterName': CLUSTER_NAME,
            'targetId': _integer('The notification target ID to delete'),
        },
        required=['clusterName', 'targetId'],
        read_only=False,
        destructive=True,
    ),
    _tool(
        'ambari_alerts_addnotificationtogroup',
        'Add a notification target to an alert group',
        {'clusterName': CLUSTER_NAME, 'groupId': GROUP_ID, 'targetId': TARGET_ID},
        required=['clusterName', 'groupId', 'targetId'],
        read_only=False,
    ),
    _tool(
        'ambari_alerts_removenotificationfromgroup',
        'Remove a notification target from an alert group',
        {'clusterName': CLUSTER_NAME, 'groupId': GROUP_ID, 'targetId': TARGET_ID},
        required=['clusterName', 'groupId', 'targetId'],
        read_only=False,
        destructive=True,
    ),
    _tool(
        'ambari_alerts_savealertsettings',
        'Save cluster-level alert settings (like repeat tolerance)',
        {
            'clusterName': CLUSTER_NAME,
            'alertRepeatTolerance': _integer(
                'Alert repeat tolerance value (number of times to repeat alerts)', default=1
            ),
        },
        required=['clusterName', 'alertRepeatTolerance'],
        read_only=False,
    ),
]

SERVICE_TOOLS: List[Tool] = [
    _tool(
        'ambari_services_getservices',
        'Get all services for a cluster',
        {
            'clusterName': CLUSTER_NAME,
            'fields': _string(
                'Filter fields in the response',
                default='ServiceInfo/service_name,ServiceInfo/cluster_name',
            ),
            'sortBy': _string(
                'Sort resources in result by (asc | desc)',
                default='ServiceInfo/service_name.asc',
            ),
            'page_size': PAGE_SIZE,
        },
        required=['clusterName'],
    ),
    _tool(
        'ambari_services_getservice',
        'Get the details of a service',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': SERVICE_NAME,
            'fields': _string('Filter fields in the response', default='ServiceInfo/*'),
        },
        required=['clusterName', 'serviceName'],
    ),
    _tool(
        'ambari_services_getserviceswithstaleconfigs',
        'Get services and components that have stale configurations requiring restart',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': SERVICE_FILTER,
            'onlyStaleConfigs': _boolean(
                'Only return components with stale configurations', default=True
            ),
        },
        required=['clusterName'],
    ),
    _tool(
        'ambari_services_gethostcomponentswithstaleconfigs',
        'Get host components that need restart due to stale configurations',
        {
            'clusterName': CLUSTER_NAME,
            'hostName': _string('Filter by specific host name (optional)'),
            'serviceName': SERVICE_FILTER,
            'componentName': _string('Filter by specific component name (optional)'),
        },
        required=['clusterName'],
    ),
    _tool(
        'ambari_services_restartservice',
        'Restart a specific service on the cluster',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': _string('The name of the service to restart'),
            'context': _string(
                'Context message for the restart operation', default='Restart service via MCP'
            ),
            'restartType': _string(
                'Type of restart operation',
                enum=['RESTART', 'ROLLING_RESTART'],
                default='RESTART',
            ),
        },
        required=['clusterName', 'serviceName'],
        read_only=False,
    ),
    _tool(
        'ambari_services_restartcomponents',
        'Restart specific components that have stale configurations',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': SERVICE_NAME,
            'componentName': _string('The name of the component to restart'),
            'hostNames': _string(
                'JSON array of host names to restart the component on '
                '(optional - restarts all if not provided)'
            ),
            'context': _string(
                'Context message for the restart operation',
                default='Restart components via MCP',
            ),
        },
        required=['clusterName', 'serviceName', 'componentName'],
        read_only=False,
    ),
    _tool(
        'ambari_services_getservicestate',
        'Get detailed state information for a specific service',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': SERVICE_NAME,
            'fields': _string(
                'Specific fields to return',
                default=(
                    'ServiceInfo/*,components/ServiceComponentInfo/*,'
                    'components/host_components/HostRoles/state,'
                    'components/host_components/HostRoles/stale_configs'
                ),
            ),
        },
        required=['clusterName', 'serviceName'],
    ),
    _tool(
        'ambari_services_startservice',
        'Start a specific service on the cluster',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': _string('The name of the service to start'),
            'context': _string(
                'Context message for the start operation', default='Start service via MCP'
            ),
        },
        required=['clusterName', 'serviceName'],
        read_only=False,
    ),
    _tool(
        'ambari_services_stopservice',
        'Stop a specific service on the cluster',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': _string('The name of the service to stop'),
            'context': _string(
                'Context message for the stop operation', default='Stop service via MCP'
            ),
        },
        required=['clusterName', 'serviceName'],
        read_only=False,
        destructive=True,
    ),
    _tool(
        'ambari_services_getrollingrestartstatus',
        'Get the status of rolling restart operations for services',
        {'clusterName': CLUSTER_NAME, 'serviceName': SERVICE_FILTER, 'requestId': REQUEST_ID},
        required=['clusterName'],
    ),
    _tool(
        'ambari_services_enablemaintenancemode',
        'Enable maintenance mode for a service or component',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': SERVICE_NAME,
            'componentName': COMPONENT_NAME_OPTIONAL,
            'hostName': HOST_NAME_FOR_COMPONENT,
        },
        required=['clusterName', 'serviceName'],
        read_only=False,
    ),
    _tool(
        'ambari_services_disablemaintenancemode',
        'Disable maintenance mode for a service or component',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': SERVICE_NAME,
            'componentName': COMPONENT_NAME_OPTIONAL,
            'hostName': HOST_NAME_FOR_COMPONENT,
        },
        required=['clusterName', 'serviceName'],
        read_only=False,
    ),
    _tool(
        'ambari_services_runservicecheck',
        'Run service check for a specific service to verify it is working correctly',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': _string('The name of the service to check'),
            'context': _string(
                'Context message for the service check operation',
                default='Service Check via MCP',
            ),
        },
        required=['clusterName', 'serviceName'],
        read_only=False,
    ),
    _tool(
        'ambari_services_isservicechecksupported',
        'Check if service check is supported for a specific service in the stack',
        {
            'clusterName': CLUSTER_NAME,
            'serviceName': SERVICE_NAME,
            'stackName': _string('The stack name (e.g., HDP, VDP)'),
            'stackVersion': _string('The stack version (e.g., 3.1, 2.6)'),
        },
        required=['clusterName', 'serviceName', 'stackName', 'stackVersion'],
    ),
    _tool(
        'ambari_services_getservicecheckstatus',
        'Get the status of recent service check operations for a service',
        {'clusterName': CLUSTER_NAME, 'serviceName': SERVICE_FILTER, 'requestId': REQUEST_ID},
        required=['clusterName'],
    ),
]

TOOL_DEFINITIONS: List[Tool] = CLUSTER_TOOLS + HOST_TOOLS + ALERT_TOOLS + SERVICE_TOOLS


def find_tool(name: str) -> Optional[Tool]:
    """Look up a tool definition by name."""
    return next((tool for tool in TOOL_DEFINITIONS if tool.name == name), None)
