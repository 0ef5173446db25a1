"""Pulumi stack entry point for the static-IP IoT endpoint."""

from __future__ import annotations

import logging

import pulumi
import structlog

from static_endpoint_infra.config import CloudProvider, StackConfig
from static_endpoint_infra.providers.aws.domain import AwsDomain, AwsDomainArgs
from static_endpoint_infra.providers.aws.endpoint import AwsEndpoint, AwsEndpointArgs
from static_endpoint_infra.providers.aws.load_balancer import AwsLoadBalancer, AwsLoadBalancerArgs
from static_endpoint_infra.providers.aws.network import AwsNetwork, AwsNetworkArgs
from static_endpoint_infra.providers.aws.resolver import AwsResolver, AwsResolverArgs

logger: logging.Logger = logging.getLogger(__name__)


class StaticEndpointStack:
    """Orchestrates all provider-agnostic infrastructure components."""

    def __init__(self, config: StackConfig) -> None:
        """Initialise the stack with resolved configuration."""
        self._config: StackConfig = config

    def run(self) -> None:
        """Provision the full infrastructure stack."""
        logger.info(
            "stack_run_started",
            extra={"cloud_provider": self._config.cloud_provider.value},
        )
        if self._config.cloud_provider == CloudProvider.AWS:
            self._run_aws()
        else:
            raise NotImplementedError(
                f"Provider '{self._config.cloud_provider}' not yet implemented."
            )

    def _run_aws(self) -> None:
        config = self._config
        zones = config.availability_zones

        network = AwsNetwork(
            "static-endpoint-network",
            AwsNetworkArgs(availability_zones=zones, cidr_block=config.vpc_cidr),
        )
        endpoint = AwsEndpoint(
            "static-endpoint-vpce",
            AwsEndpointArgs(
                vpc_id=network.outputs.vpc_id,
                subnet_ids=list(network.outputs.isolated_subnet_ids),
                region=config.aws_region,
            ),
        )
        # The endpoint places one interface per isolated subnet.
        resolver = AwsResolver(
            "static-endpoint-resolver",
            AwsResolverArgs(
                network_interface_ids=endpoint.outputs.network_interface_ids,
                address_count=len(zones),
                code_path=config.resolver_code_path,
                timeout_seconds=config.resolver_timeout_seconds,
                log_level="DEBUG" if config.environment == "dev" else "INFO",
            ),
        )
        load_balancer = AwsLoadBalancer(
            "static-endpoint-lb",
            AwsLoadBalancerArgs(
                vpc_id=network.outputs.vpc_id,
                public_subnet_ids=list(network.outputs.public_subnet_ids),
                target_ips=list(resolver.outputs.addresses),
            ),
        )
        domain = AwsDomain(
            "static-endpoint-domain",
            AwsDomainArgs(
                domain_name=config.domain_name,
                hosted_zone_id=config.hosted_zone_id,
                alias_dns_name=load_balancer.outputs.dns_name,
                alias_zone_id=load_balancer.outputs.zone_id,
                certificate_arn=config.certificate_arn,
            ),
        )

        for position, static_ip in enumerate(load_balancer.outputs.static_ips, start=1):
            pulumi.export(f"elastic_ip_{position}", static_ip)
        pulumi.export("endpoint_private_ips", resolver.outputs.addresses)
        pulumi.export("nlb_dns_name", load_balancer.outputs.dns_name)
        pulumi.export("domain_name", domain.outputs.fqdn)
        pulumi.export("certificate_arn", domain.outputs.certificate_arn)


if __name__ == "__main__":
    structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO))
    StaticEndpointStack(config=StackConfig.load()).run()
