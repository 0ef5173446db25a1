"""Tests for concurrent resolution and the order-preserving join."""
from __future__ import annotations

import threading

import pytest

from static_endpoint_infra.resolver.errors import (
    EventValidationError,
    InterfaceLookupError,
    ResolutionTimeoutError,
)
from static_endpoint_infra.resolver.resolution import ResolutionResult, resolve_addresses


class TableLookup:
    """Resolves from a fixed table; ids missing from it are not found."""

    def __init__(self, table: dict[str, str]) -> None:
        self._table: dict[str, str] = table
        self._lock = threading.Lock()
        self.calls: list[str] = []

    def __call__(self, interface_id: str) -> str:
        with self._lock:
            self.calls.append(interface_id)
        if interface_id not in self._table:
            raise InterfaceLookupError(interface_id, "not found")
        return self._table[interface_id]


def test_resolves_every_interface_in_input_order() -> None:
    lookup = TableLookup({"eni-aaa": "10.10.10.5", "eni-bbb": "10.10.10.9"})
    result = resolve_addresses(["eni-aaa", "eni-bbb"], lookup)
    assert result.data() == {"IPs": ["10.10.10.5", "10.10.10.9"]}
    assert result.interface_ids == ("eni-aaa", "eni-bbb")


def test_output_order_ignores_completion_order() -> None:
    # Each lookup waits for the one after it, so completion runs in reverse.
    ids = ["eni-1", "eni-2", "eni-3", "eni-4"]
    finished = {interface_id: threading.Event() for interface_id in ids}
    completion: list[str] = []
    lock = threading.Lock()

    def lookup(interface_id: str) -> str:
        position = ids.index(interface_id)
        if position + 1 < len(ids):
            assert finished[ids[position + 1]].wait(timeout=5)
        with lock:
            completion.append(interface_id)
        finished[interface_id].set()
        return f"10.10.10.{position + 1}"

    result = resolve_addresses(ids, lookup, max_workers=len(ids), timeout=5)

    assert completion == list(reversed(ids))
    assert list(result.addresses) == ["10.10.10.1", "10.10.10.2", "10.10.10.3", "10.10.10.4"]


def test_sequential_when_single_worker() -> None:
    lookup = TableLookup({"eni-aaa": "10.10.10.5", "eni-bbb": "10.10.10.9"})
    resolve_addresses(["eni-aaa", "eni-bbb"], lookup, max_workers=1)
    assert lookup.calls == ["eni-aaa", "eni-bbb"]


def test_duplicate_ids_resolve_at_each_position() -> None:
    lookup = TableLookup({"eni-aaa": "10.10.10.5"})
    result = resolve_addresses(["eni-aaa", "eni-aaa"], lookup)
    assert list(result.addresses) == ["10.10.10.5", "10.10.10.5"]


def test_any_failure_fails_the_whole_resolution() -> None:
    lookup = TableLookup({"eni-aaa": "10.10.10.5"})
    with pytest.raises(InterfaceLookupError, match="eni-missing not found"):
        resolve_addresses(["eni-aaa", "eni-missing"], lookup)


def test_first_failure_by_position_is_reported() -> None:
    lookup = TableLookup({"eni-aaa": "10.10.10.5"})
    with pytest.raises(InterfaceLookupError) as excinfo:
        resolve_addresses(["eni-aaa", "eni-x", "eni-y"], lookup)
    assert excinfo.value.interface_id == "eni-x"


def test_empty_input_is_a_validation_error() -> None:
    lookup = TableLookup({})
    with pytest.raises(EventValidationError):
        resolve_addresses([], lookup)
    assert lookup.calls == []


def test_slow_lookups_fail_fast() -> None:
    release = threading.Event()

    def lookup(interface_id: str) -> str:
        release.wait(timeout=5)
        return "10.10.10.5"

    try:
        with pytest.raises(ResolutionTimeoutError, match="did not finish"):
            resolve_addresses(["eni-aaa", "eni-bbb"], lookup, timeout=0.1)
    finally:
        release.set()


def test_unexpected_lookup_fault_propagates() -> None:
    def lookup(interface_id: str) -> str:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        resolve_addresses(["eni-aaa"], lookup)


def test_result_requires_matching_lengths() -> None:
    with pytest.raises(ValueError):
        ResolutionResult(["eni-aaa", "eni-bbb"], ["10.10.10.5"])
