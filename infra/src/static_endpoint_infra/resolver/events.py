"""Typed CloudFormation custom-resource lifecycle events.

The raw event is a loosely-typed mapping. It is validated exactly once, here,
into one of three frozen request variants; every missing or malformed field
collapses into a single :class:`EventValidationError`.
"""

from __future__ import annotations

import hashlib
from typing import Annotated, Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, ValidationError, model_validator

from static_endpoint_infra.resolver.errors import DeliveryError, EventValidationError

NetworkInterfaceId = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CallbackTarget(BaseModel):
    """Bookkeeping fields that must be echoed back in the response."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    request_id: str = Field(alias="RequestId")
    stack_id: str = Field(alias="StackId")
    logical_resource_id: str = Field(alias="LogicalResourceId")
    response_url: str = Field(alias="ResponseURL")
    physical_resource_id: str | None = Field(default=None, alias="PhysicalResourceId")

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> CallbackTarget:
        """Extract the reply address from a raw event.

        Raises ``DeliveryError`` when the event cannot be answered at all.
        """
        try:
            return cls.model_validate(event)
        except ValidationError as exc:
            raise DeliveryError(f"event cannot be answered: {_describe(exc)}") from exc

    def resource_id(self) -> str:
        """Return the physical resource id to report.

        Update and Delete events carry the id CloudFormation already knows;
        Create events get one derived from the stack and logical id so that a
        redelivered Create reports the same value.
        """
        if self.physical_resource_id:
            return self.physical_resource_id
        digest = hashlib.sha256(f"{self.stack_id}/{self.logical_resource_id}".encode()).hexdigest()
        return f"{self.logical_resource_id}-{digest[:16]}"


class LifecycleRequest(CallbackTarget):
    """Fields shared by every lifecycle variant."""

    resource_properties: dict[str, Any] = Field(default_factory=dict, alias="ResourceProperties")


class DeleteRequest(LifecycleRequest):
    """Delete never reads its properties, so any value is accepted."""

    request_type: Literal["Delete"] = Field(alias="RequestType")
    resource_properties: Any = Field(default=None, alias="ResourceProperties")


class _ResolveRequest(LifecycleRequest):
    network_interface_ids: tuple[NetworkInterfaceId, ...] = Field(min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _lift_interface_ids(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        properties = data.get("ResourceProperties")
        if not isinstance(properties, Mapping) or "NetworkInterfaceIds" not in properties:
            raise ValueError("ResourceProperties.NetworkInterfaceIds is required")
        return {**data, "network_interface_ids": properties["NetworkInterfaceIds"]}


class CreateRequest(_ResolveRequest):
    request_type: Literal["Create"] = Field(alias="RequestType")


class UpdateRequest(_ResolveRequest):
    request_type: Literal["Update"] = Field(alias="RequestType")
    old_resource_properties: dict[str, Any] = Field(
        default_factory=dict, alias="OldResourceProperties"
    )


Request = CreateRequest | UpdateRequest | DeleteRequest

_VARIANTS: dict[str, type[CreateRequest] | type[UpdateRequest] | type[DeleteRequest]] = {
    "Create": CreateRequest,
    "Update": UpdateRequest,
    "Delete": DeleteRequest,
}


def parse_request(event: Mapping[str, Any]) -> Request:
    """Classify and validate a raw lifecycle event.

    Raises:
        EventValidationError: The action is missing or unsupported, or the
            payload does not match the variant it names.
    """
    if "RequestType" not in event:
        raise EventValidationError("RequestType not in event")
    request_type = event["RequestType"]
    variant = _VARIANTS.get(request_type) if isinstance(request_type, str) else None
    if variant is None:
        raise EventValidationError(f"unsupported RequestType {request_type!r}")
    try:
        return variant.model_validate(event)
    except ValidationError as exc:
        raise EventValidationError(f"invalid {request_type} event: {_describe(exc)}") from exc


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "event"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)
