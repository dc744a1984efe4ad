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

"""Executors for the Ambari tools.

Each executor translates one tool's arguments into Ambari REST calls through
``AmbariClient.execute`` and returns the gateway envelope unchanged unless
noted otherwise.
"""

# Local imports
from .ambari_client import AmbariClient
from .errors import InputValidationError
from .models import (
    AlertGroupArguments,
    AlertSettingsArguments,
    CreateClusterArguments,
    DuplicateAlertGroupArguments,
    NotificationArguments,
    RestartComponentsArguments,
    RestartServiceArguments,
    UpdateAlertDefinitionArguments,
    cache_buster,
    extract_definition_ids,
)

# Third-party imports
from loguru import logger
from typing import Any, Awaitable, Callable, Dict, Optional


Executor = Callable[[AmbariClient, Dict[str, Any]], Awaitable[Dict[str, Any]]]

TOOL_EXECUTORS: Dict[str, Executor] = {}

QUORUM_CHECK_SERVICES = frozenset({'ZOOKEEPER'})
CLIENT_ONLY_SERVICES = frozenset({'TEZ', 'SQOOP', 'KERBEROS'})

REQUEST_STATUS_FIELDS = (
    'Requests/id,Requests/request_context,Requests/request_status,Requests/progress_percent,'
    'Requests/start_time,Requests/end_time,tasks/Tasks/command_name,tasks/Tasks/status,'
    'tasks/Tasks/host_name,tasks/Tasks/role'
)
STALE_SERVICES_FIELDS = (
    'ServiceInfo/service_name,ServiceInfo/state,ServiceInfo/maintenance_state,'
    'components/ServiceComponentInfo/component_name,components/ServiceComponentInfo/category,'
    'components/host_components/HostRoles/state,'
    'components/host_components/HostRoles/stale_configs,'
    'components/host_components/HostRoles/host_name,'
    'components/host_components/HostRoles/component_name'
)
STALE_HOST_COMPONENTS_FIELDS = (
    'HostRoles/component_name,HostRoles/host_name,HostRoles/service_name,HostRoles/state,'
    'HostRoles/stale_configs,HostRoles/maintenance_state'
)
SERVICE_STATE_FIELDS = (
    'ServiceInfo/*,components/ServiceComponentInfo/*,components/host_components/HostRoles/state,'
    'components/host_components/HostRoles/stale_configs'
)


def executor(name: str) -> Callable[[Executor], Executor]:
    """Register the decorated coroutine as the executor for tool ``name``."""

    def register(func: Executor) -> Executor:
        if name in TOOL_EXECUTORS:
            raise ValueError(f'Duplicate executor for tool {name}')
        TOOL_EXECUTORS[name] = func
        return func

    return register


def require_argument(args: Dict[str, Any], name: str) -> Any:
    """Return a required argument, rejecting missing or empty values."""
    value = args.get(name)
    if value is None or value == '':
        raise InputValidationError(f'Missing required argument: {name}')
    return value


# Clusters and hosts


@executor('ambari_clusters_getclusters')
async def _get_clusters(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    params = {
        'fields': args.get('fields'),
        'sortBy': args.get('sortBy'),
        'page_size': args.get('page_size'),
        'from': args.get('from'),
        'to': args.get('to'),
    }
    return await client.execute('GET', '/clusters', params)


@executor('ambari_clusters_getcluster')
async def _get_cluster(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    return await client.execute('GET', f'/clusters/{cluster_name}', {'fields': args.get('fields')})


@executor('ambari_clusters_createcluster')
async def _create_cluster(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    request = CreateClusterArguments(**args)
    return await client.execute('POST', f'/clusters/{request.clusterName}', body=request.body)


@executor('ambari_hosts_gethosts')
async def _get_hosts(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    params = {
        'fields': args.get('fields'),
        'sortBy': args.get('sortBy'),
        'page_size': args.get('page_size'),
    }
    return await client.execute('GET', '/hosts', params)


@executor('ambari_hosts_gethost')
async def _get_host(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    host_name = require_argument(args, 'hostName')
    return await client.execute('GET', f'/hosts/{host_name}', {'fields': args.get('fields')})


# Alerts


@executor('ambari_alerts_gettargets')
async def _get_alert_targets(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    params = {
        'fields': args.get('fields'),
        'sortBy': args.get('sortBy'),
        'page_size': args.get('page_size'),
    }
    return await client.execute('GET', '/alert_targets', params)


@executor('ambari_alerts_getalerts')
async def _get_alerts(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    params = {
        'fields': args.get('fields'),
        'Alert/host_name': args.get('hostName'),
        'Alert/component_name': args.get('componentName'),
        'Alert/state': args.get('state'),
        'Alert/maintenance_state': args.get('maintenanceState'),
        '_': cache_buster(),
    }
    return await client.execute('GET', f'/clusters/{cluster_name}/alerts', params)


@executor('ambari_alerts_getalertsummary')
async def _get_alert_summary(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    params: Dict[str, Any] = {'format': 'groupedSummary', '_': cache_buster()}
    if args.get('maintenanceFilter'):
        params['Alert/maintenance_state.in'] = 'OFF'
    return await client.execute('GET', f'/clusters/{cluster_name}/alerts', params)


@executor('ambari_alerts_getalertdetails')
async def _get_alert_details(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    params = {
        'fields': '*',
        'Alert/definition_id': require_argument(args, 'alertId'),
        '_': cache_buster(),
    }
    return await client.execute('GET', f'/clusters/{cluster_name}/alerts', params)


@executor('ambari_alerts_getalertdefinitions')
async def _get_alert_definitions(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    params = {'fields': args.get('fields') or '*', '_': cache_buster()}
    return await client.execute('GET', f'/clusters/{cluster_name}/alert_definitions', params)


@executor('ambari_alerts_updatealertdefinition')
async def _update_alert_definition(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    request = UpdateAlertDefinitionArguments(**args)
    body: Dict[str, Any] = {}
    if request.enabled is not None:
        body['AlertDefinition/enabled'] = request.enabled
    if request.data:
        body.update(request.data)
    return await client.execute(
        'PUT',
        f'/clusters/{request.clusterName}/alert_definitions/{request.definitionId}',
        body=body,
    )


@executor('ambari_alerts_getalertgroups')
async def _get_alert_groups(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    params = {'fields': '*', '_': cache_buster()}
    return await client.execute('GET', f'/clusters/{cluster_name}/alert_groups', params)


def _alert_group_body(request: AlertGroupArguments) -> Dict[str, Any]:
    group: Dict[str, Any] = {'name': request.groupName}
    if request.definitions:
        group['definitions'] = request.definitions
    return {'AlertGroup': group}


@executor('ambari_alerts_createalertgroup')
async def _create_alert_group(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    request = AlertGroupArguments(**args)
    return await client.execute(
        'POST', f'/clusters/{request.clusterName}/alert_groups', body=_alert_group_body(request)
    )


@executor('ambari_alerts_updatealertgroup')
async def _update_alert_group(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    request = AlertGroupArguments(**args)
    if request.groupId is None:
        raise InputValidationError('Missing required argument: groupId')
    return await client.execute(
        'PUT',
        f'/clusters/{request.clusterName}/alert_groups/{request.groupId}',
        body=_alert_group_body(request),
    )


@executor('ambari_alerts_deletealertgroup')
async def _delete_alert_group(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    group_id = require_argument(args, 'groupId')
    return await client.execute('DELETE', f'/clusters/{cluster_name}/alert_groups/{group_id}')


@executor('ambari_alerts_duplicatealertgroup')
async def _duplicate_alert_group(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    """Copy an alert group's definitions into a new group.

    Two separate calls: if the create fails the source group is untouched
    and the create error is what the caller sees.
    """
    request = DuplicateAlertGroupArguments(**args)
    source = await client.execute(
        'GET',
        f'/clusters/{request.clusterName}/alert_groups/{request.sourceGroupId}',
        {'fields': '*'},
    )
    data = source.get('data')
    source_group = data.get('AlertGroup') if isinstance(data, dict) else None
    definitions = source_group.get('definitions') if isinstance(source_group, dict) else None

    body = {
        'AlertGroup': {
            'name': request.newGroupName,
            'definitions': extract_definition_ids(definitions),
        }
    }
    return await client.execute('POST', f'/clusters/{request.clusterName}/alert_groups', body=body)


@executor('ambari_alerts_adddefinitiontogroup')
async def _add_definition_to_group(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    group_id = require_argument(args, 'groupId')
    definition_id = require_argument(args, 'definitionId')
    return await client.execute(
        'POST',
        f'/clusters/{cluster_name}/alert_groups/{group_id}/alert_definitions/{definition_id}',
    )


@executor('ambari_alerts_removedefinitionfromgroup')
async def _remove_definition_from_group(
    client: AmbariClient, args: Dict[str, Any]
) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    group_id = require_argument(args, 'groupId')
    definition_id = require_argument(args, 'definitionId')
    return await client.execute(
        'DELETE',
        f'/clusters/{cluster_name}/alert_groups/{group_id}/alert_definitions/{definition_id}',
    )


@executor('ambari_alerts_getnotifications')
async def _get_notifications(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    # Notification targets are global in Ambari; clusterName only scopes the tool call
    return await client.execute('GET', '/alert_targets', {'fields': '*', '_': cache_buster()})


@executor('ambari_alerts_createnotification')
async def _create_notification(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    request = NotificationArguments(**args)
    return await client.execute('POST', '/alert_targets', body=request.notificationData)


@executor('ambari_alerts_updatenotification')
async def _update_notification(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    request = NotificationArguments(**args)
    if request.targetId is None:
        raise InputValidationError('Missing required argument: targetId')
    return await client.execute(
        'PUT', f'/alert_targets/{request.targetId}', body=request.notificationData
    )


@executor('ambari_alerts_deletenotification')
async def _delete_notification(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    target_id = require_argument(args, 'targetId')
    return await client.execute('DELETE', f'/alert_targets/{target_id}')


@executor('ambari_alerts_addnotificationtogroup')
async def _add_notification_to_group(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    group_id = require_argument(args, 'groupId')
    target_id = require_argument(args, 'targetId')
    return await client.execute(
        'POST', f'/clusters/{cluster_name}/alert_groups/{group_id}/alert_targets/{target_id}'
    )


@executor('ambari_alerts_removenotificationfromgroup')
async def _remove_notification_from_group(
    client: AmbariClient, args: Dict[str, Any]
) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    group_id = require_argument(args, 'groupId')
    target_id = require_argument(args, 'targetId')
    return await client.execute(
        'DELETE', f'/clusters/{cluster_name}/alert_groups/{group_id}/alert_targets/{target_id}'
    )


@executor('ambari_alerts_savealertsettings')
async def _save_alert_settings(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    """Set ``alerts_repeat_tolerance`` in cluster-env, keeping every other property.

    Read-modify-write without a version check: a concurrent cluster-env change
    made between the two calls is overwritten.
    """
    request = AlertSettingsArguments(**args)
    current = await client.execute(
        'GET',
        f'/clusters/{request.clusterName}/configurations',
        {'type': 'cluster-env', 'fields': '*'},
    )

    current_properties: Dict[str, Any] = {}
    data = current.get('data')
    items = data.get('items') if isinstance(data, dict) else None
    if items and isinstance(items[0], dict):
        current_properties = items[0].get('properties') or {}

    body = {
        'Clusters': {
            'desired_config': {
                'type': 'cluster-env',
                'properties': {
                    **current_properties,
                    'alerts_repeat_tolerance': str(request.alertRepeatTolerance),
                },
            }
        }
    }
    return await client.execute('PUT', f'/clusters/{request.clusterName}', body=body)


# Services


@executor('ambari_services_getservices')
async def _get_services(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    params = {
        'fields': args.get('fields'),
        'sortBy': args.get('sortBy'),
        'page_size': args.get('page_size'),
    }
    return await client.execute('GET', f'/clusters/{cluster_name}/services', params)


@executor('ambari_services_getservice')
async def _get_service(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    service_name = require_argument(args, 'serviceName')
    return await client.execute(
        'GET', f'/clusters/{cluster_name}/services/{service_name}', {'fields': args.get('fields')}
    )


def has_stale_host_component(service: Any) -> bool:
    """True when any host component of any component in the service has stale configs."""
    if not isinstance(service, dict):
        return False
    for component in service.get('components') or []:
        if not isinstance(component, dict):
            continue
        for host_component in component.get('host_components') or []:
            roles = host_component.get('HostRoles') if isinstance(host_component, dict) else None
            if isinstance(roles, dict) and roles.get('stale_configs') is True:
                return True
    return False


@executor('ambari_services_getserviceswithstaleconfigs')
async def _get_services_with_stale_configs(
    client: AmbariClient, args: Dict[str, Any]
) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    params = {'fields': STALE_SERVICES_FIELDS, '_': cache_buster()}

    service_name = args.get('serviceName')
    if service_name:
        return await client.execute(
            'GET', f'/clusters/{cluster_name}/services/{service_name}', params
        )

    response = await client.execute('GET', f'/clusters/{cluster_name}/services', params)
    data = response.get('data')
    if args.get('onlyStaleConfigs', True) and isinstance(data, dict):
        services = data.get('items') or []
        data['items'] = [service for service in services if has_stale_host_component(service)]
    return response


@executor('ambari_services_gethostcomponentswithstaleconfigs')
async def _get_host_components_with_stale_configs(
    client: AmbariClient, args: Dict[str, Any]
) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    params = {
        'fields': STALE_HOST_COMPONENTS_FIELDS,
        'HostRoles/stale_configs': 'true',
        'HostRoles/host_name': args.get('hostName'),
        'HostRoles/service_name': args.get('serviceName'),
        'HostRoles/component_name': args.get('componentName'),
        '_': cache_buster(),
    }
    return await client.execute('GET', f'/clusters/{cluster_name}/host_components', params)


def _service_state_body(
    cluster_name: str, service_name: str, context: str, state: str, command: Optional[str] = None
) -> Dict[str, Any]:
    request_info: Dict[str, Any] = {'context': context}
    if command:
        request_info['command'] = command
    request_info['operation_level'] = {
        'level': 'SERVICE',
        'cluster_name': cluster_name,
        'service_name': service_name,
    }
    return {'RequestInfo': request_info, 'Body': {'ServiceInfo': {'state': state}}}


@executor('ambari_services_restartservice')
async def _restart_service(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    request = RestartServiceArguments(**args)
    body = _service_state_body(
        request.clusterName,
        request.serviceName,
        request.context or 'Restart service via MCP',
        'STARTED',
        command=request.restartType,
    )
    return await client.execute(
        'PUT', f'/clusters/{request.clusterName}/services/{request.serviceName}', body=body
    )


@executor('ambari_services_restartcomponents')
async def _restart_components(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    request = RestartComponentsArguments(**args)

    # Ambari predicates go in the query string verbatim, they are not key=value pairs
    predicates = []
    if request.hostNames:
        predicates.append(f'HostRoles/host_name.in({",".join(request.hostNames)})')
    predicates.append(f'HostRoles/component_name={request.componentName}')
    predicates.append(f'HostRoles/service_name={request.serviceName}')

    body = {
        'RequestInfo': {
            'context': request.context or 'Restart components via MCP',
            'command': 'RESTART',
            'operation_level': {
                'level': 'HOST_COMPONENT',
                'cluster_name': request.clusterName,
                'service_name': request.serviceName,
                'hostcomponent_name': request.componentName,
            },
        },
        'Body': {'HostRoles': {'state': 'STARTED'}},
    }
    return await client.execute(
        'PUT', f'/clusters/{request.clusterName}/host_components?{"&".join(predicates)}', body=body
    )


@executor('ambari_services_getservicestate')
async def _get_service_state(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    service_name = require_argument(args, 'serviceName')
    params = {'fields': args.get('fields') or SERVICE_STATE_FIELDS}
    return await client.execute(
        'GET', f'/clusters/{cluster_name}/services/{service_name}', params
    )


@executor('ambari_services_startservice')
async def _start_service(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    service_name = require_argument(args, 'serviceName')
    body = _service_state_body(
        cluster_name, service_name, args.get('context') or 'Start service via MCP', 'STARTED'
    )
    return await client.execute(
        'PUT', f'/clusters/{cluster_name}/services/{service_name}', body=body
    )


@executor('ambari_services_stopservice')
async def _stop_service(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    service_name = require_argument(args, 'serviceName')
    body = _service_state_body(
        cluster_name, service_name, args.get('context') or 'Stop service via MCP', 'INSTALLED'
    )
    return await client.execute(
        'PUT', f'/clusters/{cluster_name}/services/{service_name}', body=body
    )


async def _get_request_status(
    client: AmbariClient, args: Dict[str, Any], params: Dict[str, Any]
) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    params['tasks/Tasks/role.in'] = args.get('serviceName')
    request_id = args.get('requestId')
    if request_id:
        return await client.execute(
            'GET', f'/clusters/{cluster_name}/requests/{request_id}', params
        )
    return await client.execute('GET', f'/clusters/{cluster_name}/requests', params)


@executor('ambari_services_getrollingrestartstatus')
async def _get_rolling_restart_status(
    client: AmbariClient, args: Dict[str, Any]
) -> Dict[str, Any]:
    params: Dict[str, Any] = {'fields': REQUEST_STATUS_FIELDS, '_': cache_buster()}
    return await _get_request_status(client, args, params)


async def _set_maintenance_mode(
    client: AmbariClient, args: Dict[str, Any], state: str
) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    service_name = require_argument(args, 'serviceName')
    component_name = args.get('componentName')
    host_name = args.get('hostName')

    if component_name and host_name:
        body: Dict[str, Any] = {'HostRoles': {'maintenance_state': state}}
        return await client.execute(
            'PUT',
            f'/clusters/{cluster_name}/hosts/{host_name}/host_components/{component_name}',
            body=body,
        )

    if component_name:
        logger.warning(
            f'componentName {component_name} given without hostName; '
            f'applying maintenance mode to service {service_name}'
        )
    action = 'Enable' if state == 'ON' else 'Disable'
    body = {
        'RequestInfo': {'context': f'{action} Maintenance Mode via MCP'},
        'Body': {'ServiceInfo': {'maintenance_state': state}},
    }
    return await client.execute(
        'PUT', f'/clusters/{cluster_name}/services/{service_name}', body=body
    )


@executor('ambari_services_enablemaintenancemode')
async def _enable_maintenance_mode(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await _set_maintenance_mode(client, args, 'ON')


@executor('ambari_services_disablemaintenancemode')
async def _disable_maintenance_mode(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    return await _set_maintenance_mode(client, args, 'OFF')


def service_check_body(cluster_name: str, service_name: str, context: str) -> Dict[str, Any]:
    """Build the request body for a service check.

    ZooKeeper runs a quorum check and client-only services have no
    operation level; every other service uses the standard cluster-level check.
    """
    resource_filters = [{'service_name': service_name}]
    cluster_level = {'level': 'CLUSTER', 'cluster_name': cluster_name}

    if service_name in QUORUM_CHECK_SERVICES:
        request_info = {
            'command': f'{service_name}_QUORUM_SERVICE_CHECK',
            'context': context,
            'operation_level': cluster_level,
        }
    elif service_name in CLIENT_ONLY_SERVICES:
        request_info = {'context': context, 'command': f'{service_name}_SERVICE_CHECK'}
    else:
        request_info = {
            'command': f'{service_name}_SERVICE_CHECK',
            'context': context,
            'operation_level': cluster_level,
        }
    return {'RequestInfo': request_info, 'Requests/resource_filters': resource_filters}


@executor('ambari_services_runservicecheck')
async def _run_service_check(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    cluster_name = require_argument(args, 'clusterName')
    service_name = require_argument(args, 'serviceName')
    context = args.get('context') or f'{service_name} Service Check'
    body = service_check_body(cluster_name, service_name, context)
    return await client.execute('POST', f'/clusters/{cluster_name}/requests', body=body)


@executor('ambari_services_isservicechecksupported')
async def _is_service_check_supported(
    client: AmbariClient, args: Dict[str, Any]
) -> Dict[str, Any]:
    service_name = require_argument(args, 'serviceName')
    stack_name = require_argument(args, 'stackName')
    stack_version = require_argument(args, 'stackVersion')
    params = {'fields': 'StackServices/service_check_supported', '_': cache_buster()}
    return await client.execute(
        'GET', f'/stacks/{stack_name}/versions/{stack_version}/services/{service_name}', params
    )


@executor('ambari_services_getservicecheckstatus')
async def _get_service_check_status(client: AmbariClient, args: Dict[str, Any]) -> Dict[str, Any]:
    params: Dict[str, Any] = {
        'fields': REQUEST_STATUS_FIELDS,
        '_': cache_buster(),
        'Requests/request_context.matches': '.*Service Check.*',
    }
    return await _get_request_status(client, args, params)
