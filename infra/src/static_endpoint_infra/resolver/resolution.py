"""Resolve an ordered list of network interfaces to their private addresses."""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Sequence

from static_endpoint_infra.resolver.errors import (
    EventValidationError,
    InterfaceLookupError,
    ResolutionTimeoutError,
)
from static_endpoint_infra.resolver.lookup import AddressLookup

logger: logging.Logger = logging.getLogger(__name__)


class ResolutionResult:
    """Addresses in the same order as the interface ids they came from."""

    def __init__(self, interface_ids: Sequence[str], addresses: Sequence[str]) -> None:
        if len(interface_ids) != len(addresses):
            raise ValueError("every interface id needs exactly one address")
        self.interface_ids: tuple[str, ...] = tuple(interface_ids)
        self.addresses: tuple[str, ...] = tuple(addresses)

    def data(self) -> dict[str, list[str]]:
        """Return the ``Data`` mapping reported to CloudFormation."""
        return {"IPs": list(self.addresses)}


def resolve_addresses(
    interface_ids: Sequence[str],
    lookup: AddressLookup,
    *,
    max_workers: int = 4,
    timeout: float = 8.0,
) -> ResolutionResult:
    """Look up every interface concurrently and join the results by position.

    Completion order is irrelevant: each result is written back to the slot of
    the id it was submitted for. Resolution is all-or-nothing.

    Raises:
        EventValidationError: ``interface_ids`` is empty.
        InterfaceLookupError: At least one lookup failed; the failure with the
            lowest input position is raised.
        ResolutionTimeoutError: Lookups were still running after ``timeout``.
    """
    if not interface_ids:
        raise EventValidationError("NetworkInterfaceIds must not be empty")

    workers = max(1, min(max_workers, len(interface_ids)))
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="eni-lookup")
    try:
        positions: dict[Future[str], int] = {
            executor.submit(lookup, interface_id): position
            for position, interface_id in enumerate(interface_ids)
        }
        done, pending = wait(positions, timeout=timeout)
        if pending:
            raise ResolutionTimeoutError(
                f"{len(pending)} of {len(interface_ids)} network interface lookups "
                f"did not finish within {timeout:.1f}s"
            )

        addresses: list[str | None] = [None] * len(interface_ids)
        failures: dict[int, InterfaceLookupError] = {}
        for future in done:
            position = positions[future]
            try:
                addresses[position] = future.result()
            except InterfaceLookupError as exc:
                failures[position] = exc
    finally:
        executor.shutdown(wait=False, cancel_futures=True)

    for position in sorted(failures):
        failure = failures[position]
        logger.warning(
            "interface_lookup_failed",
            extra={
                "interface_id": failure.interface_id,
                "position": position,
                "reason": failure.reason,
            },
        )
    if failures:
        raise failures[min(failures)]

    resolved = [address for address in addresses if address is not None]
    for interface_id, address in zip(interface_ids, resolved):
        logger.info(
            "interface_resolved", extra={"interface_id": interface_id, "address": address}
        )
    return ResolutionResult(interface_ids, resolved)
