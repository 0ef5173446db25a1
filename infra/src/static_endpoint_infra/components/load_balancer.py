"""Provider-agnostic static-address load balancer component interface."""

from __future__ import annotations

import logging
from typing import NamedTuple, Protocol

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class ListenerPort(NamedTuple):
    """A TCP port forwarded unchanged to the private endpoint."""

    port: int
    name: str


DEFAULT_LISTENERS: tuple[ListenerPort, ...] = (
    ListenerPort(443, "HTTPS"),
    ListenerPort(8443, "ALT-HTTPS"),
    ListenerPort(8883, "MQTTS"),
)


class LoadBalancerOutputs:
    """Resolved outputs from a provisioned load balancer component."""

    def __init__(
        self,
        dns_name: pulumi.Output[str],
        zone_id: pulumi.Output[str],
        static_ips: list[pulumi.Output[str]],
    ) -> None:
        self.dns_name: pulumi.Output[str] = dns_name
        self.zone_id: pulumi.Output[str] = zone_id
        self.static_ips: list[pulumi.Output[str]] = static_ips


class StaticEndpointLoadBalancer(Protocol):
    @property
    def outputs(self) -> LoadBalancerOutputs: ...
