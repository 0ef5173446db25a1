"""Tests for the environment-driven settings classes."""
from __future__ import annotations

import pydantic
import pytest

from static_endpoint_infra.config import CloudProvider, StackConfig
from static_endpoint_infra.resolver.settings import ResolverSettings


def _required_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATIC_ENDPOINT_CLOUD_PROVIDER", "aws")
    monkeypatch.setenv("STATIC_ENDPOINT_DOMAIN_NAME", "iot.example.com")
    monkeypatch.setenv("STATIC_ENDPOINT_HOSTED_ZONE_ID", "Z0123456789ABC")


def test_cloud_provider_values() -> None:
    assert CloudProvider.AWS == "aws"
    assert CloudProvider.GCP == "gcp"
    assert CloudProvider.AZURE == "azure"


def test_stack_config_load(monkeypatch: pytest.MonkeyPatch) -> None:
    _required_env(monkeypatch)
    config = StackConfig.load()
    assert config.cloud_provider == CloudProvider.AWS
    assert config.domain_name == "iot.example.com"
    assert config.hosted_zone_id == "Z0123456789ABC"
    assert config.certificate_arn == ""
    assert config.aws_region == "us-west-2"
    assert config.availability_zones == ["us-west-2a", "us-west-2b"]
    assert config.vpc_cidr == "10.10.10.0/24"
    assert config.resolver_timeout_seconds == 10
    assert config.environment == "prod"


def test_stack_config_creates_certificate_when_arn_empty(monkeypatch: pytest.MonkeyPatch) -> None:
    _required_env(monkeypatch)
    assert StackConfig.load().create_certificate is True


def test_stack_config_uses_supplied_certificate(monkeypatch: pytest.MonkeyPatch) -> None:
    _required_env(monkeypatch)
    monkeypatch.setenv(
        "STATIC_ENDPOINT_CERTIFICATE_ARN",
        "arn:aws:acm:us-west-2:123456789012:certificate/abc",
    )
    config = StackConfig.load()
    assert config.create_certificate is False
    assert config.certificate_arn.endswith("certificate/abc")


def test_stack_config_availability_zones_from_json(monkeypatch: pytest.MonkeyPatch) -> None:
    _required_env(monkeypatch)
    monkeypatch.setenv("STATIC_ENDPOINT_AWS_REGION", "eu-central-1")
    monkeypatch.setenv(
        "STATIC_ENDPOINT_AVAILABILITY_ZONES",
        '["eu-central-1a", "eu-central-1b", "eu-central-1c"]',
    )
    config = StackConfig.load()
    assert config.aws_region == "eu-central-1"
    assert len(config.availability_zones) == 3


def test_stack_config_requires_domain(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STATIC_ENDPOINT_CLOUD_PROVIDER", "aws")
    monkeypatch.setenv("STATIC_ENDPOINT_HOSTED_ZONE_ID", "Z0123456789ABC")
    monkeypatch.delenv("STATIC_ENDPOINT_DOMAIN_NAME", raising=False)
    with pytest.raises(pydantic.ValidationError):
        StackConfig.load()


def test_stack_config_rejects_unknown_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    _required_env(monkeypatch)
    monkeypatch.setenv("STATIC_ENDPOINT_ENVIRONMENT", "qa")
    with pytest.raises(pydantic.ValidationError):
        StackConfig.load()


def test_resolver_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("MAX_WORKERS", "LOOKUP_TIMEOUT_SECONDS", "LOG_LEVEL"):
        monkeypatch.delenv(f"ENI_RESOLVER_{var}", raising=False)
    settings = ResolverSettings.load()
    assert settings.max_workers == 4
    assert settings.lookup_timeout_seconds == 6.0
    assert settings.log_level == "INFO"


def test_resolver_settings_read_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENI_RESOLVER_MAX_WORKERS", "2")
    monkeypatch.setenv("ENI_RESOLVER_LOG_LEVEL", "DEBUG")
    settings = ResolverSettings.load()
    assert settings.max_workers == 2
    assert settings.log_level == "DEBUG"


def test_resolution_timeout_without_lambda_context() -> None:
    settings = ResolverSettings(lookup_timeout_seconds=6.0)
    assert settings.resolution_timeout(None) == 6.0


def test_resolution_timeout_leaves_room_to_reply() -> None:
    settings = ResolverSettings(
        lookup_timeout_seconds=6.0, deadline_margin_seconds=2.0, response_timeout_seconds=1.0
    )
    assert settings.resolution_timeout(5.0) == 2.0


def test_default_budget_fits_ten_second_function() -> None:
    settings = ResolverSettings()
    lookups = settings.resolution_timeout(10.0)
    assert lookups == 3.0
    assert lookups + settings.response_timeout_seconds + settings.deadline_margin_seconds <= 10.0


def test_resolution_timeout_has_floor() -> None:
    settings = ResolverSettings(lookup_timeout_seconds=6.0, deadline_margin_seconds=2.0)
    assert settings.resolution_timeout(1.0) == 0.5
