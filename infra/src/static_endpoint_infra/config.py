"""Typed configuration loaded from environment variables at startup."""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger: logging.Logger = logging.getLogger(__name__)


class CloudProvider(StrEnum):
    """Supported cloud provider deployment targets."""

    AWS = "aws"
    GCP = "gcp"
    AZURE = "azure"


class StackConfig(BaseSettings):
    """Fully validated infrastructure stack configuration.

    All values are sourced from environment variables at startup.
    Raises ``ValidationError`` on missing or invalid values.
    """

    model_config = SettingsConfigDict(
        env_prefix="STATIC_ENDPOINT_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    cloud_provider: CloudProvider
    domain_name: str
    hosted_zone_id: str
    certificate_arn: str = ""
    aws_region: str = "us-west-2"
    availability_zones: list[str] = Field(default_factory=lambda: ["us-west-2a", "us-west-2b"])
    vpc_cidr: str = "10.10.10.0/24"
    resolver_code_path: str = "build/resolver"
    resolver_timeout_seconds: int = Field(default=10, ge=3, le=60)
    environment: Literal["prod", "staging", "dev"] = "prod"

    @property
    def create_certificate(self) -> bool:
        """``True`` when no certificate ARN was supplied and one must be issued."""
        return not self.certificate_arn

    @classmethod
    def load(cls) -> StackConfig:
        """Load and validate configuration from the environment.

        Logs each resolved setting at DEBUG level.
        Raises ``pydantic.ValidationError`` on missing or invalid values.
        """
        config = cls()  # type: ignore[call-arg]  # env vars supply required fields
        logger.debug(
            "stack_config_loaded",
            extra={
                "cloud_provider": config.cloud_provider.value,
                "domain_name": config.domain_name,
                "aws_region": config.aws_region,
                "availability_zones": config.availability_zones,
                "create_certificate": config.create_certificate,
                "environment": config.environment,
            },
        )
        return config
