"""Lambda entry point for the ``Custom::NetworkInterfaceIps`` resource.

CloudFormation invokes the function on Create, Update and Delete and blocks
until a response arrives at ``ResponseURL``. Create and Update resolve the
requested network interfaces to their private addresses; Delete has nothing
to undo. Every invocation replies exactly once.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import structlog

from static_endpoint_infra.resolver.errors import DeliveryError
from static_endpoint_infra.resolver.events import CallbackTarget, DeleteRequest, parse_request
from static_endpoint_infra.resolver.lookup import AddressLookup, Ec2AddressLookup, ec2_client
from static_endpoint_infra.resolver.resolution import resolve_addresses
from static_endpoint_infra.resolver.response import ResponseEnvelope, ResponseSignaler, reporting
from static_endpoint_infra.resolver.settings import ResolverSettings

logger: logging.Logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Render log records as JSON lines for CloudWatch.

    Fields passed through ``extra`` and values bound with
    ``structlog.contextvars`` both end up as top-level JSON keys.
    """
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
    )
    stream = logging.StreamHandler()
    stream.setFormatter(formatter)
    root = logging.getLogger()
    # The Lambda runtime installs its own plain-text handler on the root logger.
    root.handlers = [stream]
    root.setLevel(level)


class ProvisioningHandler:
    """Classifies one lifecycle event, resolves it and signals the outcome."""

    def __init__(
        self,
        lookup: AddressLookup,
        signaler: ResponseSignaler,
        settings: ResolverSettings,
    ) -> None:
        self._lookup: AddressLookup = lookup
        self._signaler: ResponseSignaler = signaler
        self._settings: ResolverSettings = settings

    def handle(self, event: Mapping[str, Any], context: Any = None) -> ResponseEnvelope:
        """Process ``event`` and return the envelope that was delivered.

        Raises:
            DeliveryError: The event has no usable reply address, or the
                reply could not be delivered.
        """
        target = _callback_target(event)
        logger.info(
            "request_received",
            extra={"resource_properties": event.get("ResourceProperties")},
        )

        with reporting(self._signaler, target) as outcome:
            request = parse_request(event)
            if isinstance(request, DeleteRequest):
                # The interfaces belong to the VPC endpoint, not to this resource.
                outcome.succeed({})
            else:
                result = resolve_addresses(
                    request.network_interface_ids,
                    self._lookup,
                    max_workers=self._settings.max_workers,
                    timeout=self._settings.resolution_timeout(_remaining_seconds(context)),
                )
                outcome.succeed(result.data())
        return outcome.envelope


def _callback_target(event: Mapping[str, Any]) -> CallbackTarget:
    try:
        target = CallbackTarget.from_event(event)
    except DeliveryError:
        logger.exception("event_unanswerable", extra={"keys": sorted(event)})
        raise

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=target.request_id,
        logical_resource_id=target.logical_resource_id,
        request_type=event.get("RequestType"),
    )
    return target


def _remaining_seconds(context: Any) -> float | None:
    remaining = getattr(context, "get_remaining_time_in_millis", None)
    if remaining is None:
        return None
    return remaining() / 1000.0


def _report_setup_failure(event: Mapping[str, Any], exc: Exception) -> ResponseEnvelope:
    """Reply FAILED for an invocation that could not build its handler."""
    target = _callback_target(event)
    logger.error("resolver_setup_failed", exc_info=exc)
    with reporting(ResponseSignaler(), target) as outcome:
        outcome.fail(f"resolver could not start: {type(exc).__name__}")
    return outcome.envelope


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """AWS Lambda handler."""
    configure_logging("INFO")
    try:
        settings = ResolverSettings.load()
        configure_logging(settings.log_level)
        handler = ProvisioningHandler(
            lookup=Ec2AddressLookup(ec2_client()),
            signaler=ResponseSignaler(timeout=settings.response_timeout_seconds),
            settings=settings,
        )
    except Exception as exc:
        return _report_setup_failure(event, exc).payload()
    return handler.handle(event, context).payload()
