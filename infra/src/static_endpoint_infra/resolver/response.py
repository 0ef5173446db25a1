"""Response envelope and guaranteed single delivery to CloudFormation."""

from __future__ import annotations

import json
from contextlib import contextmanager
from enum import StrEnum
import logging
from typing import Any, Iterator

import httpx
from pydantic import BaseModel, ConfigDict, Field

from static_endpoint_infra.resolver.errors import DeliveryError, ResolverError
from static_endpoint_infra.resolver.events import CallbackTarget

logger: logging.Logger = logging.getLogger(__name__)


class Status(StrEnum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class ResponseEnvelope(BaseModel):
    """The body PUT to the pre-signed ``ResponseURL``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    status: Status = Field(alias="Status")
    reason: str | None = Field(default=None, alias="Reason")
    physical_resource_id: str = Field(alias="PhysicalResourceId")
    stack_id: str = Field(alias="StackId")
    request_id: str = Field(alias="RequestId")
    logical_resource_id: str = Field(alias="LogicalResourceId")
    no_echo: bool = Field(default=False, alias="NoEcho")
    data: dict[str, Any] = Field(default_factory=dict, alias="Data")

    @classmethod
    def success(cls, target: CallbackTarget, data: dict[str, Any]) -> ResponseEnvelope:
        return cls(status=Status.SUCCESS, data=data, **_echo(target))

    @classmethod
    def failure(cls, target: CallbackTarget, reason: str) -> ResponseEnvelope:
        return cls(status=Status.FAILED, reason=reason, **_echo(target))

    def payload(self) -> dict[str, Any]:
        """Serialise with CloudFormation field names, omitting ``Reason`` on success."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _echo(target: CallbackTarget) -> dict[str, str]:
    return {
        "physical_resource_id": target.resource_id(),
        "stack_id": target.stack_id,
        "request_id": target.request_id,
        "logical_resource_id": target.logical_resource_id,
    }


class ResponseSignaler:
    """Delivers envelopes to the callback URL with a single HTTP PUT."""

    def __init__(self, client: httpx.Client | None = None, timeout: float = 5.0) -> None:
        self._client: httpx.Client = client or httpx.Client(timeout=timeout)

    def send(self, envelope: ResponseEnvelope, response_url: str) -> None:
        """PUT ``envelope`` to ``response_url``.

        The pre-signed S3 URL was signed without a content type, so the
        request must carry an empty one.

        Raises:
            DeliveryError: The request failed or was rejected.
        """
        body = json.dumps(envelope.payload())
        try:
            response = self._client.put(
                response_url,
                content=body.encode("utf-8"),
                headers={"Content-Type": ""},
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DeliveryError(f"response delivery failed: {exc}") from exc
        logger.info(
            "response_sent",
            extra={
                "status": envelope.status.value,
                "http_status": response.status_code,
                "request_id": envelope.request_id,
            },
        )


class Outcome:
    """Mutable holder for the result of a single invocation."""

    def __init__(self, target: CallbackTarget) -> None:
        self._target: CallbackTarget = target
        self.envelope: ResponseEnvelope = ResponseEnvelope.failure(
            target, "handler finished without recording an outcome"
        )

    def succeed(self, data: dict[str, Any]) -> None:
        self.envelope = ResponseEnvelope.success(self._target, data)

    def fail(self, reason: str) -> None:
        self.envelope = ResponseEnvelope.failure(self._target, reason)


@contextmanager
def reporting(signaler: ResponseSignaler, target: CallbackTarget) -> Iterator[Outcome]:
    """Send exactly one envelope when the block exits, however it exits.

    ``ResolverError`` becomes a FAILED envelope carrying its message; any other
    exception becomes a FAILED envelope naming only the exception class, with
    the traceback logged. A delivery failure is logged and re-raised.
    """
    outcome = Outcome(target)
    try:
        yield outcome
    except ResolverError as exc:
        outcome.fail(str(exc))
    except Exception as exc:
        logger.exception("unexpected_error", extra={"request_id": target.request_id})
        outcome.fail(f"unexpected {type(exc).__name__} while resolving network interfaces")

    try:
        signaler.send(outcome.envelope, target.response_url)
    except DeliveryError:
        logger.exception(
            "response_delivery_failed",
            extra={
                "request_id": target.request_id,
                "status": outcome.envelope.status.value,
            },
        )
        raise
