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

"""Tests for resource URI parsing, grouping and handlers."""

import pytest
import string
from awslabs.ambari_mcp_server.errors import AmbariApiError
from awslabs.ambari_mcp_server.resources import (
    ALERTS_FIELDS,
    ALERT_STATES,
    CLUSTERS_FIELDS,
    RESOURCE_TEMPLATES,
    RESOURCES,
    ResourceDescriptor,
    ResourceHandler,
    ResourceKind,
    group_alerts_by_state,
    group_stale_components_by_service,
    parse_resource_uri,
)
from hypothesis import given
from hypothesis import strategies as st
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_REQUEST
from pydantic import ValidationError


NAMES = st.text(alphabet=string.ascii_letters + string.digits + '-_.', min_size=1, max_size=20)


def ok(data=None):
    """Build a successful gateway envelope."""
    return {'status': 200, 'statusText': 'OK', 'data': data}


class TestParseResourceUri:
    """Test the resource URI grammar."""

    @pytest.mark.parametrize(
        'uri,kind,params',
        [
            ('ambari://clusters', ResourceKind.CLUSTERS, {}),
            ('ambari://cluster/prod', ResourceKind.CLUSTER, {'cluster_name': 'prod'}),
            ('ambari://cluster/prod/services', ResourceKind.SERVICES, {'cluster_name': 'prod'}),
            ('ambari://cluster/prod/hosts', ResourceKind.HOSTS, {'cluster_name': 'prod'}),
            ('ambari://cluster/prod/alerts', ResourceKind.ALERTS, {'cluster_name': 'prod'}),
            (
                'ambari://cluster/prod/alerts/summary',
                ResourceKind.ALERTS_SUMMARY,
                {'cluster_name': 'prod'},
            ),
            (
                'ambari://cluster/prod/services/stale-configs',
                ResourceKind.STALE_CONFIGS,
                {'cluster_name': 'prod'},
            ),
            (
                'ambari://cluster/prod/requests/recent',
                ResourceKind.RECENT_REQUESTS,
                {'cluster_name': 'prod'},
            ),
            (
                'ambari://cluster/prod/configurations',
                ResourceKind.CONFIGURATIONS,
                {'cluster_name': 'prod'},
            ),
            (
                'ambari://cluster/prod/service/HDFS',
                ResourceKind.SERVICE,
                {'cluster_name': 'prod', 'service_name': 'HDFS'},
            ),
            (
                'ambari://cluster/prod/service/HDFS/components',
                ResourceKind.SERVICE_COMPONENTS,
                {'cluster_name': 'prod', 'service_name': 'HDFS'},
            ),
            (
                'ambari://host/node1.example.com',
                ResourceKind.HOST,
                {'host_name': 'node1.example.com'},
            ),
        ],
    )
    def test_recognized_shapes(self, uri, kind, params):
        """Test every recognized URI shape."""
        descriptor = parse_resource_uri(uri)

        assert descriptor.kind == kind
        for name in ('cluster_name', 'service_name', 'host_name'):
            assert getattr(descriptor, name) == params.get(name)

    @pytest.mark.parametrize(
        'uri',
        [
            'http://clusters',
            'clusters',
            'ambari://',
            'ambari://clusters/',
            'ambari://clusters/extra',
            'ambari://cluster',
            'ambari://cluster/',
            'ambari://cluster//services',
            'ambari://cluster/prod/unknown',
            'ambari://cluster/prod/alerts/details',
            'ambari://cluster/prod/service',
            'ambari://cluster/prod/service/HDFS/hosts',
            'ambari://host',
            'ambari://host/a/b',
            'ambari://service/HDFS',
            'ambari://cluster/prod%2Fservices%2FHDFS',
            'ambari://cluster/prod/service/HDFS%2Fcomponents',
            'ambari://host/..%2Fclusters',
        ],
    )
    def test_rejects_malformed_uris(self, uri):
        """Test that malformed or unrecognized URIs fail with invalid request."""
        with pytest.raises(McpError) as exc_info:
            parse_resource_uri(uri)

        assert exc_info.value.error.code == INVALID_REQUEST
        assert uri in exc_info.value.error.message

    def test_percent_decoded_segments(self):
        """Test that path segments are percent-decoded."""
        descriptor = parse_resource_uri('ambari://cluster/my%20cluster/service/HDFS')
        assert descriptor.cluster_name == 'my cluster'

    @given(cluster=NAMES, service=NAMES)
    def test_parse_is_deterministic(self, cluster, service):
        """Property test: parsing the same URI twice yields equal descriptors."""
        uri = f'ambari://cluster/{cluster}/service/{service}/components'

        first = parse_resource_uri(uri)

        assert first == parse_resource_uri(uri)
        assert first.cluster_name == cluster
        assert first.service_name == service

    @given(host=NAMES)
    def test_host_round_trip(self, host):
        """Property test: any simple host name is recovered from its URI."""
        assert parse_resource_uri(f'ambari://host/{host}').host_name == host


class TestResourceDescriptor:
    """Test descriptor validity rules."""

    def test_missing_required_parameter(self):
        """Test that a kind's required parameters must be present."""
        with pytest.raises(ValidationError):
            ResourceDescriptor(kind=ResourceKind.SERVICE, cluster_name='prod')

    def test_empty_required_parameter(self):
        """Test that required parameters must be non-empty."""
        with pytest.raises(ValidationError):
            ResourceDescriptor(kind=ResourceKind.HOST, host_name='')

    def test_unexpected_parameter(self):
        """Test that parameters a kind does not take are rejected."""
        with pytest.raises(ValidationError):
            ResourceDescriptor(kind=ResourceKind.CLUSTERS, cluster_name='prod')

    def test_parameter_must_be_single_segment(self):
        """Test that a parameter containing a slash is rejected."""
        with pytest.raises(ValidationError):
            ResourceDescriptor(kind=ResourceKind.CLUSTER, cluster_name='prod/services/HDFS')


def alert(state):
    """Build an Ambari alert item."""
    return {'Alert': {'state': state, 'label': f'{state} alert'}}


def stale(service, host='h1'):
    """Build an Ambari stale host component item."""
    roles = {'host_name': host, 'component_name': 'C', 'stale_configs': True}
    if service is not None:
        roles['service_name'] = service
    return {'HostRoles': roles}


class TestGrouping:
    """Test alert and stale-configuration grouping."""

    def test_alerts_by_state(self):
        """Test that alerts land in their state's bucket."""
        items = [alert('CRITICAL'), alert('OK'), alert('OK'), alert('BOGUS'), {'no': 'alert'}]

        buckets = group_alerts_by_state(items)

        assert list(buckets) == list(ALERT_STATES)
        assert len(buckets['CRITICAL']) == 1
        assert len(buckets['WARNING']) == 0
        assert len(buckets['OK']) == 2
        assert len(buckets['UNKNOWN']) == 2

    @given(states=st.lists(st.sampled_from(list(ALERT_STATES) + ['MAINTENANCE', ''])))
    def test_alert_buckets_partition_input(self, states):
        """Property test: every alert appears in exactly one bucket."""
        items = [alert(state) for state in states]

        buckets = group_alerts_by_state(items)

        assert sum(len(bucket) for bucket in buckets.values()) == len(items)
        for item in items:
            assert sum(item in bucket for bucket in buckets.values()) >= 1

    def test_stale_by_service(self):
        """Test grouping stale components by service."""
        items = [stale('HDFS'), stale('YARN'), stale('HDFS', 'h2'), stale(None)]

        groups = group_stale_components_by_service(items)

        assert groups == {'HDFS': [items[0], items[2]], 'YARN': [items[1]]}

    @given(services=st.lists(st.one_of(st.none(), st.sampled_from(['HDFS', 'YARN', 'HIVE']))))
    def test_stale_groups_cover_named_items(self, services):
        """Property test: groups hold exactly the items that name a service."""
        items = [stale(service, f'h{i}') for i, service in enumerate(services)]

        groups = group_stale_components_by_service(items)

        grouped = [item for group in groups.values() for item in group]
        named = [item for item in items if item['HostRoles'].get('service_name')]
        assert sorted(grouped, key=str) == sorted(named, key=str)
        for service, group in groups.items():
            assert all(item['HostRoles']['service_name'] == service for item in group)


class TestResourceHandler:
    """Test resource reads through a mocked Ambari client."""

    async def test_clusters_envelope(self, mock_client):
        """Test the read envelope for the cluster list."""
        mock_client.execute.return_value = ok({'items': [{'Clusters': {'cluster_name': 'prod'}}]})
        handler = ResourceHandler(mock_client)

        result = await handler.read('ambari://clusters')

        mock_client.execute.assert_awaited_once_with(
            'GET', '/clusters', {'fields': CLUSTERS_FIELDS}
        )
        assert result['uri'] == 'ambari://clusters'
        assert result['type'] == 'clusters'
        assert isinstance(result['executionTimeMs'], int)
        assert result['timestamp'].endswith('Z')
        assert result['data'] == {'items': [{'Clusters': {'cluster_name': 'prod'}}]}

    async def test_alerts_grouped_with_counts(self, mock_client):
        """Test that cluster alerts are grouped by state with a count summary."""
        mock_client.execute.return_value = ok(
            {'items': [alert('CRITICAL'), alert('WARNING'), alert('WARNING')]}
        )
        handler = ResourceHandler(mock_client)

        result = await handler.read('ambari://cluster/prod/alerts')

        method, path, params = mock_client.execute.await_args.args
        assert (method, path) == ('GET', '/clusters/prod/alerts')
        assert params['fields'] == ALERTS_FIELDS
        assert isinstance(params['_'], int)
        assert result['summary'] == {'critical': 1, 'warning': 2, 'ok': 0, 'unknown': 0}
        assert len(result['data']['WARNING']) == 2

    async def test_stale_configs_summary(self, mock_client):
        """Test the stale configuration view."""
        items = [stale('HDFS'), stale('HDFS', 'h2'), stale('YARN')]
        mock_client.execute.return_value = ok({'items': items})
        handler = ResourceHandler(mock_client)

        result = await handler.read('ambari://cluster/prod/services/stale-configs')

        path = mock_client.execute.await_args.args[1]
        assert path == '/clusters/prod/host_components'
        assert mock_client.execute.await_args.args[2]['HostRoles/stale_configs'] == 'true'
        assert result['type'] == 'stale-configurations'
        assert result['summary'] == {'totalStaleComponents': 3, 'affectedServices': 2}
        assert set(result['data']) == {'HDFS', 'YARN'}

    async def test_service_and_host_paths(self, mock_client):
        """Test the Ambari paths used for service and host views."""
        handler = ResourceHandler(mock_client)

        service = await handler.read('ambari://cluster/prod/service/HDFS/components')
        host = await handler.read('ambari://host/node1')

        paths = [call.args[1] for call in mock_client.execute.await_args_list]
        assert paths == ['/clusters/prod/services/HDFS', '/hosts/node1']
        assert service['serviceName'] == 'HDFS'
        assert host['hostName'] == 'node1'

    async def test_recent_requests_query(self, mock_client):
        """Test the recent requests query ordering and page size."""
        handler = ResourceHandler(mock_client)

        await handler.read('ambari://cluster/prod/requests/recent')

        params = mock_client.execute.await_args.args[2]
        assert params['sortBy'] == 'Requests/id.desc'
        assert params['page_size'] == 20

    async def test_invalid_uri_makes_no_call(self, mock_client):
        """Test that an invalid URI fails before any Ambari call."""
        handler = ResourceHandler(mock_client)

        with pytest.raises(McpError) as exc_info:
            await handler.read('ambari://cluster/prod/nope')

        assert exc_info.value.error.code == INVALID_REQUEST
        mock_client.execute.assert_not_awaited()

    async def test_encoded_slash_cannot_reach_another_path(self, mock_client):
        """Test that an encoded slash in a name never becomes extra upstream segments."""
        handler = ResourceHandler(mock_client)

        with pytest.raises(McpError) as exc_info:
            await handler.read('ambari://cluster/prod%2Fservices%2FHDFS')

        assert exc_info.value.error.code == INVALID_REQUEST
        mock_client.execute.assert_not_awaited()

    async def test_gateway_failure(self, mock_client):
        """Test that gateway failures surface as internal errors with diagnostics."""
        mock_client.execute.side_effect = AmbariApiError(
            'GET http://h/clusters | HTTP 503 Service Unavailable', {'status': 503}
        )
        handler = ResourceHandler(mock_client)

        with pytest.raises(McpError) as exc_info:
            await handler.read('ambari://clusters')

        assert exc_info.value.error.code == INTERNAL_ERROR
        assert 'HTTP 503' in exc_info.value.error.message
        assert exc_info.value.error.data == {'diagnostics': {'status': 503}}

    async def test_unexpected_failure(self, mock_client):
        """Test that other failures are wrapped with the URI."""
        mock_client.execute.side_effect = RuntimeError('boom')
        handler = ResourceHandler(mock_client)

        with pytest.raises(McpError) as exc_info:
            await handler.read('ambari://cluster/prod')

        assert exc_info.value.error.code == INTERNAL_ERROR
        assert exc_info.value.error.message == (
            'Resource access failed for ambari://cluster/prod: boom'
        )


class TestResourceCatalog:
    """Test the published resources."""

    def test_fixed_and_templated_resources(self):
        """Test the resource and template counts."""
        assert [str(resource.uri) for resource in RESOURCES] == ['ambari://clusters']
        assert len(RESOURCE_TEMPLATES) == 11

    def test_every_template_parses(self):
        """Test that each template, once filled in, is a recognized URI."""
        kinds = set()
        for template in RESOURCE_TEMPLATES:
            uri = (
                template.uriTemplate.replace('{clusterName}', 'prod')
                .replace('{serviceName}', 'HDFS')
                .replace('{hostName}', 'node1')
            )
            kinds.add(parse_resource_uri(uri).kind)

        assert kinds == set(ResourceKind) - {ResourceKind.CLUSTERS}

    def test_every_kind_has_a_handler(self, mock_client):
        """Test that no resource kind lacks a handler."""
        assert set(ResourceHandler(mock_client).handlers) == set(ResourceKind)
