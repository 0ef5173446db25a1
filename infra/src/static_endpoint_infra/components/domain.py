"""Provider-agnostic custom domain component interface."""

from __future__ import annotations

import logging
from typing import Protocol

import pulumi

logger: logging.Logger = logging.getLogger(__name__)


class DomainOutputs:
    """Resolved outputs from a provisioned custom domain component."""

    def __init__(
        self,
        fqdn: pulumi.Output[str],
        certificate_arn: pulumi.Output[str],
        domain_configuration_name: pulumi.Output[str],
    ) -> None:
        """Initialise domain outputs.

        Args:
            fqdn: Fully qualified name clients connect to.
            certificate_arn: Server certificate presented for ``fqdn``; either
                the configured one or a newly issued one.
            domain_configuration_name: Name of the service-side domain
                configuration that accepts ``fqdn``.
        """
        self.fqdn: pulumi.Output[str] = fqdn
        self.certificate_arn: pulumi.Output[str] = certificate_arn
        self.domain_configuration_name: pulumi.Output[str] = domain_configuration_name


class StaticEndpointDomain(Protocol):
    """Provider-agnostic interface for the custom domain component."""

    @property
    def outputs(self) -> DomainOutputs:
        """Return the resolved domain outputs."""
        ...
