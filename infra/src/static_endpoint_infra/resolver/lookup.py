"""Read-only lookup of a network interface's private IPv4 address."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from static_endpoint_infra.resolver.errors import InterfaceLookupError

logger: logging.Logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = frozenset({"InvalidNetworkInterfaceID.NotFound"})
_MALFORMED_CODES = frozenset({"InvalidNetworkInterfaceID.Malformed"})


class AddressLookup(Protocol):
    """Resolves one network interface id to its bound private address."""

    def __call__(self, interface_id: str) -> str: ...


def ec2_client(region_name: str | None = None, timeout: float = 3.0) -> Any:
    """Build an EC2 client that fails fast and never retries.

    Retry policy belongs to CloudFormation redelivering the whole event.
    """
    return boto3.client(
        "ec2",
        region_name=region_name,
        config=Config(
            connect_timeout=timeout,
            read_timeout=timeout,
            retries={"total_max_attempts": 1, "mode": "standard"},
        ),
    )


class Ec2AddressLookup:
    """``AddressLookup`` backed by ``ec2:DescribeNetworkInterfaces``."""

    def __init__(self, client: Any) -> None:
        self._client: Any = client

    def __call__(self, interface_id: str) -> str:
        try:
            response = self._client.describe_network_interfaces(NetworkInterfaceIds=[interface_id])
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "Unknown")
            raise InterfaceLookupError(interface_id, _client_error_reason(code)) from exc
        except BotoCoreError as exc:
            raise InterfaceLookupError(
                interface_id, f"could not be described ({type(exc).__name__})"
            ) from exc

        interfaces = response.get("NetworkInterfaces", [])
        if not interfaces:
            raise InterfaceLookupError(interface_id, "not found")
        interface = interfaces[0]
        if interface.get("Status") == "available":
            raise InterfaceLookupError(interface_id, "is not attached")
        address = interface.get("PrivateIpAddress")
        if not address:
            raise InterfaceLookupError(interface_id, "has no private IP address")

        logger.debug(
            "interface_described", extra={"interface_id": interface_id, "address": address}
        )
        return str(address)


def _client_error_reason(code: str) -> str:
    if code in _NOT_FOUND_CODES:
        return "not found"
    if code in _MALFORMED_CODES:
        return "is malformed"
    return f"could not be described ({code})"
