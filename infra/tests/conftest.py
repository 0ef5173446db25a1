"""Shared fixtures for the resolver handler tests."""
from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from static_endpoint_infra.resolver.response import ResponseSignaler

RESPONSE_URL = "https://cloudformation-custom-resource-response-uswest2.s3.amazonaws.com/callback?sig=abc"


class CallbackRecorder:
    """Captures every PUT made to the pre-signed response URL."""

    def __init__(self, status_code: int = 200) -> None:
        self.status_code: int = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code)

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def callback() -> CallbackRecorder:
    return CallbackRecorder()


@pytest.fixture
def signaler(callback: CallbackRecorder) -> ResponseSignaler:
    return ResponseSignaler(client=httpx.Client(transport=httpx.MockTransport(callback)))


@pytest.fixture
def make_event() -> Callable[..., dict[str, Any]]:
    def _make(request_type: str | None = "Create", **overrides: Any) -> dict[str, Any]:
        event: dict[str, Any] = {
            "ServiceToken": "arn:aws:lambda:us-west-2:123456789012:function:resolver",
            "ResponseURL": RESPONSE_URL,
            "StackId": "arn:aws:cloudformation:us-west-2:123456789012:stack/ips/guid",
            "RequestId": "req-1",
            "LogicalResourceId": "NetworkInterfaceIps",
            "ResourceType": "Custom::NetworkInterfaceIps",
            "ResourceProperties": {
                "ServiceToken": "arn:aws:lambda:us-west-2:123456789012:function:resolver",
                "NetworkInterfaceIds": ["eni-aaa", "eni-bbb"],
            },
        }
        if request_type is not None:
            event["RequestType"] = request_type
        event.update(overrides)
        return event

    return _make
