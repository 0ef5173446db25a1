"""Tests for the top-level stack orchestration."""
from __future__ import annotations

import pytest

from static_endpoint_infra.__main__ import StaticEndpointStack
from static_endpoint_infra.config import CloudProvider, StackConfig


def _config(provider: CloudProvider) -> StackConfig:
    return StackConfig(
        cloud_provider=provider,
        domain_name="iot.example.com",
        hosted_zone_id="Z0123456789ABC",
    )


@pytest.mark.parametrize("provider", [CloudProvider.GCP, CloudProvider.AZURE])
def test_stack_rejects_unimplemented_providers(provider: CloudProvider) -> None:
    with pytest.raises(NotImplementedError, match=provider.value):
        StaticEndpointStack(config=_config(provider)).run()
