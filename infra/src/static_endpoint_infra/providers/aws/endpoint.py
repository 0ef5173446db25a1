"""AWS interface VPC endpoint implementation of StaticEndpointService."""

from __future__ import annotations

import logging

import pulumi
import pulumi_aws as aws

from static_endpoint_infra.components.endpoint import EndpointOutputs
from static_endpoint_infra.components.load_balancer import DEFAULT_LISTENERS, ListenerPort

logger: logging.Logger = logging.getLogger(__name__)


class AwsEndpointArgs:
    """Arguments for the AWS interface VPC endpoint component."""

    def __init__(
        self,
        vpc_id: pulumi.Input[str],
        subnet_ids: list[pulumi.Input[str]],
        region: str,
        service: str = "iot.data",
        listeners: tuple[ListenerPort, ...] = DEFAULT_LISTENERS,
    ) -> None:
        self.vpc_id: pulumi.Input[str] = vpc_id
        self.subnet_ids: list[pulumi.Input[str]] = subnet_ids
        self.service_name: str = f"com.amazonaws.{region}.{service}"
        self.listeners: tuple[ListenerPort, ...] = listeners


class AwsEndpoint(pulumi.ComponentResource):
    """Interface VPC endpoint satisfying ``StaticEndpointService``.

    The load balancer in front of it does not support security groups, so
    the endpoint's group admits every listener port from anywhere. Private
    DNS stays off: clients reach the endpoint through the custom domain.
    """

    def __init__(
        self,
        name: str,
        args: AwsEndpointArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("static-endpoint:aws:Endpoint", name, {}, opts)

        logger.debug(
            "provisioning_aws_endpoint",
            extra={"name": name, "service_name": args.service_name},
        )

        security_group = aws.ec2.SecurityGroup(
            f"{name}-sg",
            aws.ec2.SecurityGroupArgs(
                vpc_id=args.vpc_id,
                description="Allow endpoint access from anywhere",
                ingress=[
                    aws.ec2.SecurityGroupIngressArgs(
                        protocol="tcp",
                        from_port=listener.port,
                        to_port=listener.port,
                        cidr_blocks=["0.0.0.0/0"],
                        description=f"Allow {listener.name} access from anywhere",
                    )
                    for listener in args.listeners
                ],
                egress=[
                    aws.ec2.SecurityGroupEgressArgs(
                        protocol="tcp",
                        from_port=listener.port,
                        to_port=listener.port,
                        cidr_blocks=["0.0.0.0/0"],
                        description=f"Allow {listener.name} access to anywhere",
                    )
                    for listener in args.listeners
                ],
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        endpoint = aws.ec2.VpcEndpoint(
            f"{name}-vpce",
            aws.ec2.VpcEndpointArgs(
                vpc_id=args.vpc_id,
                service_name=args.service_name,
                vpc_endpoint_type="Interface",
                subnet_ids=args.subnet_ids,
                security_group_ids=[security_group.id],
                private_dns_enabled=False,
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        self._outputs: EndpointOutputs = EndpointOutputs(
            endpoint_id=endpoint.id,
            network_interface_ids=endpoint.network_interface_ids,
            security_group_id=security_group.id,
        )

        self.register_outputs(
            {
                "endpoint_id": self._outputs.endpoint_id,
                "network_interface_ids": self._outputs.network_interface_ids,
                "security_group_id": self._outputs.security_group_id,
            }
        )

    @property
    def outputs(self) -> EndpointOutputs:
        """Return the resolved endpoint outputs."""
        return self._outputs
