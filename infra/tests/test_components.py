"""Verify that component Protocol interfaces are importable and well-typed."""
from __future__ import annotations

import pulumi

from static_endpoint_infra.components.domain import DomainOutputs, StaticEndpointDomain
from static_endpoint_infra.components.endpoint import EndpointOutputs, StaticEndpointService
from static_endpoint_infra.components.load_balancer import (
    DEFAULT_LISTENERS,
    LoadBalancerOutputs,
    StaticEndpointLoadBalancer,
)
from static_endpoint_infra.components.network import NetworkOutputs, StaticEndpointNetwork
from static_endpoint_infra.components.resolver import ResolverOutputs, StaticEndpointResolver


def test_protocols_are_importable() -> None:
    assert StaticEndpointNetwork is not None
    assert StaticEndpointService is not None
    assert StaticEndpointResolver is not None
    assert StaticEndpointLoadBalancer is not None
    assert StaticEndpointDomain is not None


def test_default_listeners_cover_iot_data_ports() -> None:
    assert [listener.port for listener in DEFAULT_LISTENERS] == [443, 8443, 8883]
    assert [listener.name for listener in DEFAULT_LISTENERS] == ["HTTPS", "ALT-HTTPS", "MQTTS"]


def test_network_outputs_constructible() -> None:
    outputs = NetworkOutputs(
        vpc_id=pulumi.Output.from_input("vpc-123"),
        public_subnet_ids=[
            pulumi.Output.from_input("subnet-pub-1"),
            pulumi.Output.from_input("subnet-pub-2"),
        ],
        isolated_subnet_ids=[
            pulumi.Output.from_input("subnet-iso-1"),
            pulumi.Output.from_input("subnet-iso-2"),
        ],
    )
    assert len(outputs.public_subnet_ids) == 2
    assert len(outputs.isolated_subnet_ids) == 2


def test_endpoint_outputs_constructible() -> None:
    outputs = EndpointOutputs(
        endpoint_id=pulumi.Output.from_input("vpce-123"),
        network_interface_ids=pulumi.Output.from_input(["eni-aaa", "eni-bbb"]),
        security_group_id=pulumi.Output.from_input("sg-123"),
    )
    assert outputs is not None


def test_resolver_outputs_keep_address_order() -> None:
    first = pulumi.Output.from_input("10.10.10.5")
    second = pulumi.Output.from_input("10.10.10.9")
    outputs = ResolverOutputs(
        function_arn=pulumi.Output.from_input("arn:aws:lambda:us-west-2:123456789012:function:fn"),
        addresses=[first, second],
    )
    assert outputs.addresses == [first, second]


def test_load_balancer_outputs_constructible() -> None:
    outputs = LoadBalancerOutputs(
        dns_name=pulumi.Output.from_input("nlb-123.elb.us-west-2.amazonaws.com"),
        zone_id=pulumi.Output.from_input("Z18D5FSROUN65G"),
        static_ips=[pulumi.Output.from_input("203.0.113.10")],
    )
    assert len(outputs.static_ips) == 1


def test_domain_outputs_constructible() -> None:
    outputs = DomainOutputs(
        fqdn=pulumi.Output.from_input("iot.example.com"),
        certificate_arn=pulumi.Output.from_input("arn:aws:acm:us-west-2:123456789012:certificate/abc"),
        domain_configuration_name=pulumi.Output.from_input("static-ips"),
    )
    assert outputs is not None
