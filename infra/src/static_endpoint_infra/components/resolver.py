"""Provider-agnostic interface-address resolver component interface."""

from __future__ import annotations

import logging
from typing import Protocol

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class ResolverOutputs:
    """Private addresses of the endpoint interfaces, resolved at deploy time."""

    def __init__(
        self,
        function_arn: pulumi.Output[str],
        addresses: list[pulumi.Output[str]],
    ) -> None:
        """Initialise resolver outputs.

        Args:
            function_arn: ARN of the function backing the custom resource.
            addresses: One private IPv4 address per position, in the order of
                the interface ids that were resolved.
        """
        self.function_arn: pulumi.Output[str] = function_arn
        self.addresses: list[pulumi.Output[str]] = addresses


class StaticEndpointResolver(Protocol):
    @property
    def outputs(self) -> ResolverOutputs: ...
