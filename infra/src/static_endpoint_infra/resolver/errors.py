"""Exception hierarchy for the network-interface resolver."""

from __future__ import annotations


class ResolverError(Exception):
    """Base class for failures that are reported back to CloudFormation.

    ``str(error)`` is used verbatim as the ``Reason`` of a FAILED response,
    so messages must be human-readable and free of internal detail.
    """


class EventValidationError(ResolverError):
    """The lifecycle event is malformed or carries an unsupported action."""


class InterfaceLookupError(ResolverError):
    """A single network interface could not be resolved to an address."""

    def __init__(self, interface_id: str, reason: str) -> None:
        super().__init__(f"network interface {interface_id} {reason}")
        self.interface_id: str = interface_id
        self.reason: str = reason


class ResolutionTimeoutError(ResolverError):
    """Lookups did not finish inside the invocation's time budget."""


class DeliveryError(ResolverError):
    """The response could not be delivered to the callback URL.

    Nothing is left to report this to, so it only surfaces through logs and
    the Lambda error metric.
    """
