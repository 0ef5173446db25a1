"""AWS ACM + IoT domain configuration + Route53 implementation of StaticEndpointDomain."""

from __future__ import annotations

import logging
from typing import Any

import pulumi
import pulumi_aws as aws

from static_endpoint_infra.components.domain import DomainOutputs

logger: logging.Logger = logging.getLogger(__name__)


def _validation_field(options: list[Any], field: str) -> str:
    """Read ``field`` from the first ACM DNS validation option."""
    option = options[0]
    value = getattr(option, field, None)
    if value is None and isinstance(option, dict):
        value = option.get(field)
    return str(value)


class AwsDomainArgs:
    """Arguments for the AWS custom domain component.

    Args:
        domain_name: Name clients connect to, without the trailing dot.
        hosted_zone_id: Route53 zone the alias and validation records go into.
        alias_dns_name: DNS name of the load balancer the domain points at.
        alias_zone_id: Canonical hosted zone of the load balancer.
        certificate_arn: Existing certificate for ``domain_name``. Empty issues
            and DNS-validates a new one.
    """

    def __init__(
        self,
        domain_name: str,
        hosted_zone_id: pulumi.Input[str],
        alias_dns_name: pulumi.Input[str],
        alias_zone_id: pulumi.Input[str],
        certificate_arn: str = "",
    ) -> None:
        self.domain_name: str = domain_name
        self.hosted_zone_id: pulumi.Input[str] = hosted_zone_id
        self.alias_dns_name: pulumi.Input[str] = alias_dns_name
        self.alias_zone_id: pulumi.Input[str] = alias_zone_id
        self.certificate_arn: str = certificate_arn


class AwsDomain(pulumi.ComponentResource):
    """Custom IoT data domain served through the static-address load balancer."""

    def __init__(
        self,
        name: str,
        args: AwsDomainArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("static-endpoint:aws:Domain", name, {}, opts)

        logger.debug(
            "provisioning_aws_domain",
            extra={
                "name": name,
                "domain_name": args.domain_name,
                "create_certificate": not args.certificate_arn,
            },
        )

        certificate_arn: pulumi.Output[str]
        if args.certificate_arn:
            certificate_arn = pulumi.Output.from_input(args.certificate_arn)
        else:
            certificate = aws.acm.Certificate(
                f"{name}-cert",
                aws.acm.CertificateArgs(
                    domain_name=args.domain_name,
                    validation_method="DNS",
                ),
                opts=pulumi.ResourceOptions(parent=self),
            )
            options = certificate.domain_validation_options
            validation_record = aws.route53.Record(
                f"{name}-cert-validation",
                aws.route53.RecordArgs(
                    zone_id=args.hosted_zone_id,
                    name=options.apply(lambda o: _validation_field(o, "resource_record_name")),
                    type=options.apply(lambda o: _validation_field(o, "resource_record_type")),
                    records=[options.apply(lambda o: _validation_field(o, "resource_record_value"))],
                    ttl=60,
                    allow_overwrite=True,
                ),
                opts=pulumi.ResourceOptions(parent=self),
            )
            validation = aws.acm.CertificateValidation(
                f"{name}-cert-validated",
                aws.acm.CertificateValidationArgs(
                    certificate_arn=certificate.arn,
                    validation_record_fqdns=[validation_record.fqdn],
                ),
                opts=pulumi.ResourceOptions(parent=self),
            )
            certificate_arn = validation.certificate_arn

        domain_configuration = aws.iot.DomainConfiguration(
            f"{name}-iot-domain",
            aws.iot.DomainConfigurationArgs(
                name=f"{name}-static-ips",
                domain_name=args.domain_name,
                server_certificate_arns=[certificate_arn],
                service_type="DATA",
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        record = aws.route53.Record(
            f"{name}-alias",
            aws.route53.RecordArgs(
                zone_id=args.hosted_zone_id,
                name=args.domain_name,
                type="A",
                aliases=[
                    aws.route53.RecordAliasArgs(
                        name=args.alias_dns_name,
                        zone_id=args.alias_zone_id,
                        evaluate_target_health=False,
                    )
                ],
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        self._outputs: DomainOutputs = DomainOutputs(
            fqdn=record.fqdn,
            certificate_arn=certificate_arn,
            domain_configuration_name=domain_configuration.name,
        )

        self.register_outputs(
            {
                "fqdn": self._outputs.fqdn,
                "certificate_arn": self._outputs.certificate_arn,
                "domain_configuration_name": self._outputs.domain_configuration_name,
            }
        )

    @property
    def outputs(self) -> DomainOutputs:
        """Return the resolved domain outputs."""
        return self._outputs
