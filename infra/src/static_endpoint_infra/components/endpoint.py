"""Provider-agnostic private service endpoint component interface."""

from __future__ import annotations

import logging
from typing import Protocol

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class EndpointOutputs:
    """Resolved outputs from a provisioned private service endpoint."""

    def __init__(
        self,
        endpoint_id: pulumi.Output[str],
        network_interface_ids: pulumi.Output[list[str]],
        security_group_id: pulumi.Output[str],
    ) -> None:
        """Initialise endpoint outputs.

        Args:
            endpoint_id: Provider-specific endpoint identifier.
            network_interface_ids: Interfaces the endpoint placed in the isolated
                subnets. Their private addresses are only known after creation.
            security_group_id: Security group guarding the endpoint interfaces.
        """
        self.endpoint_id: pulumi.Output[str] = endpoint_id
        self.network_interface_ids: pulumi.Output[list[str]] = network_interface_ids
        self.security_group_id: pulumi.Output[str] = security_group_id


class StaticEndpointService(Protocol):
    """Provider-agnostic interface for the private service endpoint."""

    @property
    def outputs(self) -> EndpointOutputs:
        """Return the resolved endpoint outputs."""
        ...
