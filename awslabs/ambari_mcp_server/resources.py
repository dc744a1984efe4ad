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

"""Ambari MCP resources: URI addressing, handlers and the published catalog.

Resources are read-only views addressed as ``ambari://<path>``::

    ambari://clusters
    ambari://cluster/{clusterName}
    ambari://cluster/{clusterName}/services
    ambari://cluster/{clusterName}/hosts
    ambari://cluster/{clusterName}/alerts
    ambari://cluster/{clusterName}/alerts/summary
    ambari://cluster/{clusterName}/services/stale-configs
    ambari://cluster/{clusterName}/requests/recent
    ambari://cluster/{clusterName}/configurations
    ambari://cluster/{clusterName}/service/{serviceName}
    ambari://cluster/{clusterName}/service/{serviceName}/components
    ambari://host/{hostName}
"""

# Standard library imports
import time
from enum import Enum
from urllib.parse import unquote

# Local imports
from .ambari_client import AmbariClient
from .errors import AmbariApiError, internal_error, invalid_request
from .models import cache_buster, utc_timestamp

# Third-party imports
from loguru import logger
from mcp.shared.exceptions import McpError
from mcp.types import Resource, ResourceTemplate
from pydantic import AnyUrl, BaseModel, ConfigDict, ValidationError, model_validator
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple


RESOURCE_SCHEME = 'ambari://'
JSON_MIME_TYPE = 'application/json'


class ResourceKind(str, Enum):
    """Closed set of resource kinds addressable by URI."""

    CLUSTERS = 'clusters'
    CLUSTER = 'cluster'
    SERVICES = 'services'
    HOSTS = 'hosts'
    ALERTS = 'alerts'
    ALERTS_SUMMARY = 'alerts-summary'
    STALE_CONFIGS = 'stale-configs'
    SERVICE = 'service'
    SERVICE_COMPONENTS = 'service-components'
    HOST = 'host'
    RECENT_REQUESTS = 'recent-requests'
    CONFIGURATIONS = 'configurations'


PATH_PARAMETERS = ('cluster_name', 'service_name', 'host_name')

REQUIRED_PARAMETERS: Dict[ResourceKind, Tuple[str, ...]] = {
    ResourceKind.CLUSTERS: (),
    ResourceKind.CLUSTER: ('cluster_name',),
    ResourceKind.SERVICES: ('cluster_name',),
    ResourceKind.HOSTS: ('cluster_name',),
    ResourceKind.ALERTS: ('cluster_name',),
    ResourceKind.ALERTS_SUMMARY: ('cluster_name',),
    ResourceKind.STALE_CONFIGS: ('cluster_name',),
    ResourceKind.SERVICE: ('cluster_name', 'service_name'),
    ResourceKind.SERVICE_COMPONENTS: ('cluster_name', 'service_name'),
    ResourceKind.HOST: ('host_name',),
    ResourceKind.RECENT_REQUESTS: ('cluster_name',),
    ResourceKind.CONFIGURATIONS: ('cluster_name',),
}

# Literal suffixes after cluster/<name>; matched against the whole remainder
CLUSTER_SUFFIXES: Dict[Tuple[str, ...], ResourceKind] = {
    ('services',): ResourceKind.SERVICES,
    ('hosts',): ResourceKind.HOSTS,
    ('alerts',): ResourceKind.ALERTS,
    ('alerts', 'summary'): ResourceKind.ALERTS_SUMMARY,
    ('services', 'stale-configs'): ResourceKind.STALE_CONFIGS,
    ('requests', 'recent'): ResourceKind.RECENT_REQUESTS,
    ('configurations',): ResourceKind.CONFIGURATIONS,
}


class ResourceDescriptor(BaseModel):
    """A parsed resource URI: its kind plus the path parameters that kind requires."""

    model_config = ConfigDict(frozen=True)

    kind: ResourceKind
    cluster_name: Optional[str] = None
    service_name: Optional[str] = None
    host_name: Optional[str] = None

    @model_validator(mode='after')
    def check_parameters(self) -> 'ResourceDescriptor':
        """Require exactly the parameters the kind needs, each a single non-empty segment."""
        required = REQUIRED_PARAMETERS[self.kind]
        for name in PATH_PARAMETERS:
            value = getattr(self, name)
            if name in required and not value:
                raise ValueError(f'{self.kind.value} resource requires a non-empty {name}')
            if name not in required and value is not None:
                raise ValueError(f'{self.kind.value} resource does not take {name}')
            if value and '/' in value:
                raise ValueError(f'{name} must be a single path segment: {value!r}')
        return self


def _match_path(segments: List[str]) -> Optional[ResourceDescriptor]:
    head, rest = segments[0], segments[1:]

    if head == 'clusters' and not rest:
        return ResourceDescriptor(kind=ResourceKind.CLUSTERS)

    if head == 'host' and len(rest) == 1:
        return ResourceDescriptor(kind=ResourceKind.HOST, host_name=rest[0])

    if head != 'cluster' or not rest:
        return None

    cluster_name, suffix = rest[0], tuple(rest[1:])
    if not suffix:
        return ResourceDescriptor(kind=ResourceKind.CLUSTER, cluster_name=cluster_name)
    if suffix in CLUSTER_SUFFIXES:
        return ResourceDescriptor(kind=CLUSTER_SUFFIXES[suffix], cluster_name=cluster_name)

    if suffix[0] == 'service' and len(suffix) in (2, 3):
        if len(suffix) == 2:
            kind = ResourceKind.SERVICE
        elif suffix[2] == 'components':
            kind = ResourceKind.SERVICE_COMPONENTS
        else:
            return None
        return ResourceDescriptor(kind=kind, cluster_name=cluster_name, service_name=suffix[1])

    return None


def parse_resource_uri(uri: str) -> ResourceDescriptor:
    """Parse an ``ambari://`` URI into a resource descriptor.

    Raises an MCP invalid-request error for a missing scheme, an empty path
    segment or any path that is not one of the recognized shapes.
    """
    if not uri.startswith(RESOURCE_SCHEME):
        raise invalid_request(f'Invalid resource URI: {uri}', {'uri': uri})

    path = uri[len(RESOURCE_SCHEME) :]
    segments = path.split('/')
    if any(not segment for segment in segments):
        raise invalid_request(f'Invalid resource URI (empty path segment): {uri}', {'uri': uri})

    try:
        descriptor = _match_path([unquote(segment) for segment in segments])
    except ValidationError as e:
        raise invalid_request(
            f'Invalid resource URI: {uri}', {'uri': uri, 'reason': str(e)}
        ) from e

    if descriptor is None:
        raise invalid_request(f'Unsupported resource URI: {uri}', {'uri': uri})
    return descriptor


ALERT_STATES = ('CRITICAL', 'WARNING', 'OK', 'UNKNOWN')


def group_alerts_by_state(items: Optional[List[Any]]) -> Dict[str, List[Any]]:
    """Partition alerts into CRITICAL, WARNING, OK and UNKNOWN buckets by ``Alert.state``."""
    buckets: Dict[str, List[Any]] = {state: [] for state in ALERT_STATES}
    for item in items or []:
        alert = item.get('Alert') if isinstance(item, dict) else None
        state = alert.get('state') if isinstance(alert, dict) else None
        buckets[state if state in buckets else 'UNKNOWN'].append(item)
    return buckets


def group_stale_components_by_service(items: Optional[List[Any]]) -> Dict[str, List[Any]]:
    """Group stale host components by ``HostRoles.service_name``.

    Items without a service name are left out.
    """
    groups: Dict[str, List[Any]] = {}
    for item in items or []:
        roles = item.get('HostRoles') if isinstance(item, dict) else None
        service_name = roles.get('service_name') if isinstance(roles, dict) else None
        if service_name:
            groups.setdefault(service_name, []).append(item)
    return groups


def _items(data: Any) -> List[Any]:
    if isinstance(data, dict) and isinstance(data.get('items'), list):
        return data['items']
    return []


CLUSTERS_FIELDS = 'Clusters/cluster_name,Clusters/version,Clusters/state,Clusters/health_report'
CLUSTER_FIELDS = (
    'Clusters/*,services/ServiceInfo/service_name,services/ServiceInfo/state,'
    'hosts/Hosts/host_name,hosts/Hosts/host_status'
)
SERVICES_FIELDS = (
    'ServiceInfo/service_name,ServiceInfo/state,ServiceInfo/maintenance_state,'
    'components/ServiceComponentInfo/component_name,components/ServiceComponentInfo/total_count,'
    'components/ServiceComponentInfo/started_count'
)
HOSTS_FIELDS = (
    'Hosts/host_name,Hosts/host_status,Hosts/maintenance_state,'
    'host_components/HostRoles/component_name,host_components/HostRoles/state'
)
ALERTS_FIELDS = (
    'Alert/definition_name,Alert/service_name,Alert/component_name,Alert/host_name,'
    'Alert/state,Alert/text,Alert/timestamp'
)
STALE_CONFIGS_FIELDS = (
    'HostRoles/component_name,HostRoles/host_name,HostRoles/service_name,'
    'HostRoles/state,HostRoles/stale_configs'
)
SERVICE_FIELDS = (
    'ServiceInfo/*,components/ServiceComponentInfo/*,components/host_components/HostRoles/state,'
    'components/host_components/HostRoles/host_name,'
    'components/host_components/HostRoles/stale_configs'
)
SERVICE_COMPONENTS_FIELDS = (
    'components/ServiceComponentInfo/component_name,components/ServiceComponentInfo/category,'
    'components/ServiceComponentInfo/total_count,components/ServiceComponentInfo/started_count,'
    'components/host_components/HostRoles/host_name,components/host_components/HostRoles/state,'
    'components/host_components/HostRoles/stale_configs'
)
HOST_FIELDS = (
    'Hosts/*,host_components/HostRoles/component_name,host_components/HostRoles/service_name,'
    'host_components/HostRoles/state,host_components/HostRoles/stale_configs'
)
RECENT_REQUESTS_FIELDS = (
    'Requests/id,Requests/request_context,Requests/request_status,Requests/progress_percent,'
    'Requests/start_time,Requests/end_time,Requests/create_time'
)
RECENT_REQUESTS_PAGE_SIZE = 20
CONFIGURATIONS_FIELDS = 'Config/type,Config/tag,Config/version,Config/service_name'


class ResourceHandler:
    """Reads resources by issuing Ambari calls and reshaping their results."""

    def __init__(self, ambari_client: AmbariClient):
        """Initialize the handler table for every resource kind."""
        self.client = ambari_client
        self.handlers: Dict[ResourceKind, Callable[[ResourceDescriptor], Awaitable[Dict]]] = {
            ResourceKind.CLUSTERS: self._handle_clusters,
            ResourceKind.CLUSTER: self._handle_cluster,
            ResourceKind.SERVICES: self._handle_services,
            ResourceKind.HOSTS: self._handle_hosts,
            ResourceKind.ALERTS: self._handle_alerts,
            ResourceKind.ALERTS_SUMMARY: self._handle_alerts_summary,
            ResourceKind.STALE_CONFIGS: self._handle_stale_configs,
            ResourceKind.SERVICE: self._handle_service,
            ResourceKind.SERVICE_COMPONENTS: self._handle_service_components,
            ResourceKind.HOST: self._handle_host,
            ResourceKind.RECENT_REQUESTS: self._handle_recent_requests,
            ResourceKind.CONFIGURATIONS: self._handle_configurations,
        }

    async def read(self, uri: str) -> Dict[str, Any]:
        """Resolve and read a resource URI, returning the timed response envelope."""
        descriptor = parse_resource_uri(uri)
        handler = self.handlers[descriptor.kind]

        start = time.perf_counter()
        try:
            result = await handler(descriptor)
        except McpError:
            raise
        except AmbariApiError as e:
            raise e.to_mcp_error() from e
        except Exception as e:
            logger.exception('Unexpected error reading resource', uri=uri)
            raise internal_error(
                f'Resource access failed for {uri}: {e}', {'uri': uri, 'originalError': str(e)}
            ) from e
        execution_time_ms = round((time.perf_counter() - start) * 1000)

        return {
            'uri': uri,
            'executionTimeMs': execution_time_ms,
            'timestamp': utc_timestamp(),
            **result,
        }

    async def _handle_clusters(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute('GET', '/clusters', {'fields': CLUSTERS_FIELDS})
        return {'type': 'clusters', 'data': response['data']}

    async def _handle_cluster(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET', f'/clusters/{descriptor.cluster_name}', {'fields': CLUSTER_FIELDS}
        )
        return {
            'type': 'cluster-details',
            'clusterName': descriptor.cluster_name,
            'data': response['data'],
        }

    async def _handle_services(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET', f'/clusters/{descriptor.cluster_name}/services', {'fields': SERVICES_FIELDS}
        )
        return {
            'type': 'cluster-services',
            'clusterName': descriptor.cluster_name,
            'data': response['data'],
        }

    async def _handle_hosts(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET', f'/clusters/{descriptor.cluster_name}/hosts', {'fields': HOSTS_FIELDS}
        )
        return {
            'type': 'cluster-hosts',
            'clusterName': descriptor.cluster_name,
            'data': response['data'],
        }

    async def _handle_alerts(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET',
            f'/clusters/{descriptor.cluster_name}/alerts',
            {'fields': ALERTS_FIELDS, '_': cache_buster()},
        )
        alerts_by_state = group_alerts_by_state(_items(response['data']))
        return {
            'type': 'cluster-alerts',
            'clusterName': descriptor.cluster_name,
            'summary': {state.lower(): len(alerts) for state, alerts in alerts_by_state.items()},
            'data': alerts_by_state,
        }

    async def _handle_alerts_summary(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET',
            f'/clusters/{descriptor.cluster_name}/alerts',
            {'format': 'groupedSummary', '_': cache_buster()},
        )
        return {
            'type': 'alerts-summary',
            'clusterName': descriptor.cluster_name,
            'data': response['data'],
        }

    async def _handle_stale_configs(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET',
            f'/clusters/{descriptor.cluster_name}/host_components',
            {
                'fields': STALE_CONFIGS_FIELDS,
                'HostRoles/stale_configs': 'true',
                '_': cache_buster(),
            },
        )
        items = _items(response['data'])
        stale_by_service = group_stale_components_by_service(items)
        return {
            'type': 'stale-configurations',
            'clusterName': descriptor.cluster_name,
            'summary': {
                'totalStaleComponents': len(items),
                'affectedServices': len(stale_by_service),
            },
            'data': stale_by_service,
        }

    async def _handle_service(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET',
            f'/clusters/{descriptor.cluster_name}/services/{descriptor.service_name}',
            {'fields': SERVICE_FIELDS},
        )
        return {
            'type': 'service-details',
            'clusterName': descriptor.cluster_name,
            'serviceName': descriptor.service_name,
            'data': response['data'],
        }

    async def _handle_service_components(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET',
            f'/clusters/{descriptor.cluster_name}/services/{descriptor.service_name}',
            {'fields': SERVICE_COMPONENTS_FIELDS},
        )
        return {
            'type': 'service-components',
            'clusterName': descriptor.cluster_name,
            'serviceName': descriptor.service_name,
            'data': response['data'],
        }

    async def _handle_host(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET', f'/hosts/{descriptor.host_name}', {'fields': HOST_FIELDS}
        )
        return {
            'type': 'host-details',
            'hostName': descriptor.host_name,
            'data': response['data'],
        }

    async def _handle_recent_requests(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET',
            f'/clusters/{descriptor.cluster_name}/requests',
            {
                'fields': RECENT_REQUESTS_FIELDS,
                'sortBy': 'Requests/id.desc',
                'page_size': RECENT_REQUESTS_PAGE_SIZE,
                '_': cache_buster(),
            },
        )
        return {
            'type': 'recent-requests',
            'clusterName': descriptor.cluster_name,
            'data': response['data'],
        }

    async def _handle_configurations(self, descriptor: ResourceDescriptor) -> Dict[str, Any]:
        response = await self.client.execute(
            'GET',
            f'/clusters/{descriptor.cluster_name}/configurations',
            {'fields': CONFIGURATIONS_FIELDS, '_': cache_buster()},
        )
        return {
            'type': 'cluster-configurations',
            'clusterName': descriptor.cluster_name,
            'data': response['data'],
        }


RESOURCES: List[Resource] = [
    Resource(
        uri=AnyUrl('ambari://clusters'),
        name='Ambari Clusters',
        description='List of all Ambari clusters with basic information',
        mimeType=JSON_MIME_TYPE,
    ),
]


def _template(uri_template: str, name: str, description: str) -> ResourceTemplate:
    return ResourceTemplate(
        uriTemplate=uri_template, name=name, description=description, mimeType=JSON_MIME_TYPE
    )


RESOURCE_TEMPLATES: List[ResourceTemplate] = [
    _template(
        'ambari://cluster/{clusterName}',
        'Cluster Details',
        'Detailed information about a specific cluster including services and hosts',
    ),
    _template(
        'ambari://cluster/{clusterName}/services',
        'Cluster Services',
        'All services running in a specific cluster with their status',
    ),
    _template(
        'ambari://cluster/{clusterName}/hosts',
        'Cluster Hosts',
        'All hosts in a specific cluster with their status and components',
    ),
    _template(
        'ambari://cluster/{clusterName}/alerts',
        'Cluster Alerts',
        'Current alerts for a specific cluster grouped by severity',
    ),
    _template(
        'ambari://cluster/{clusterName}/alerts/summary',
        'Alert Summary',
        'Summarized alert information for quick cluster health overview',
    ),
    _template(
        'ambari://cluster/{clusterName}/services/stale-configs',
        'Stale Configurations',
        'Services and components that need restart due to configuration changes',
    ),
    _template(
        'ambari://cluster/{clusterName}/service/{serviceName}',
        'Service Details',
        'Detailed information about a specific service including components and configurations',
    ),
    _template(
        'ambari://cluster/{clusterName}/service/{serviceName}/components',
        'Service Components',
        'All components of a specific service with their host assignments and status',
    ),
    _template(
        'ambari://host/{hostName}',
        'Host Details',
        'Detailed information about a specific host including installed components',
    ),
    _template(
        'ambari://cluster/{clusterName}/requests/recent',
        'Recent Operations',
        'Recent operations and their status (restarts, service checks, etc.)',
    ),
    _template(
        'ambari://cluster/{clusterName}/configurations',
        'Cluster Configurations',
        'Current configuration for all services in the cluster',
    ),
]
