"""AWS Network Load Balancer + Elastic IP implementation of StaticEndpointLoadBalancer."""

from __future__ import annotations

import logging

import pulumi
import pulumi_aws as aws

from static_endpoint_infra.components.load_balancer import (
    DEFAULT_LISTENERS,
    ListenerPort,
    LoadBalancerOutputs,
)

logger: logging.Logger = logging.getLogger(__name__)


class AwsLoadBalancerArgs:
    """Arguments for the AWS load balancer component.

    Args:
        vpc_id: VPC holding the target addresses.
        public_subnet_ids: One public subnet per availability zone; each gets
            its own Elastic IP.
        target_ips: Private addresses registered behind every listener.
        listeners: TCP ports to forward.
    """

    def __init__(
        self,
        vpc_id: pulumi.Input[str],
        public_subnet_ids: list[pulumi.Input[str]],
        target_ips: list[pulumi.Input[str]],
        listeners: tuple[ListenerPort, ...] = DEFAULT_LISTENERS,
    ) -> None:
        self.vpc_id: pulumi.Input[str] = vpc_id
        self.public_subnet_ids: list[pulumi.Input[str]] = public_subnet_ids
        self.target_ips: list[pulumi.Input[str]] = target_ips
        self.listeners: tuple[ListenerPort, ...] = listeners


class AwsLoadBalancer(pulumi.ComponentResource):
    """Internet-facing NLB with one Elastic IP per zone satisfying ``StaticEndpointLoadBalancer``.

    Elastic IPs are retained on delete so the published static addresses
    survive a stack teardown and redeploy.
    """

    def __init__(
        self,
        name: str,
        args: AwsLoadBalancerArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("static-endpoint:aws:LoadBalancer", name, {}, opts)

        logger.debug(
            "provisioning_aws_load_balancer",
            extra={
                "name": name,
                "zones": len(args.public_subnet_ids),
                "ports": [listener.port for listener in args.listeners],
            },
        )

        eips = [
            aws.ec2.Eip(
                f"{name}-eip-{index + 1}",
                aws.ec2.EipArgs(domain="vpc"),
                opts=pulumi.ResourceOptions(parent=self, retain_on_delete=True),
            )
            for index in range(len(args.public_subnet_ids))
        ]

        nlb = aws.lb.LoadBalancer(
            f"{name}-nlb",
            aws.lb.LoadBalancerArgs(
                load_balancer_type="network",
                internal=False,
                subnet_mappings=[
                    aws.lb.LoadBalancerSubnetMappingArgs(subnet_id=subnet_id, allocation_id=eip.allocation_id)
                    for subnet_id, eip in zip(args.public_subnet_ids, eips)
                ],
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        for listener in args.listeners:
            slug = listener.name.lower()

            tg = aws.lb.TargetGroup(
                f"{name}-tg-{slug}",
                aws.lb.TargetGroupArgs(
                    port=listener.port,
                    protocol="TCP",
                    target_type="ip",
                    vpc_id=args.vpc_id,
                ),
                opts=pulumi.ResourceOptions(parent=self),
            )

            for position, target_ip in enumerate(args.target_ips):
                aws.lb.TargetGroupAttachment(
                    f"{name}-tg-{slug}-{position}",
                    aws.lb.TargetGroupAttachmentArgs(
                        target_group_arn=tg.arn,
                        target_id=target_ip,
                        port=listener.port,
                    ),
                    opts=pulumi.ResourceOptions(parent=self),
                )

            aws.lb.Listener(
                f"{name}-listener-{slug}",
                aws.lb.ListenerArgs(
                    load_balancer_arn=nlb.arn,
                    port=listener.port,
                    protocol="TCP",
                    default_actions=[
                        aws.lb.ListenerDefaultActionArgs(type="forward", target_group_arn=tg.arn)
                    ],
                ),
                opts=pulumi.ResourceOptions(parent=self),
            )

        self._outputs: LoadBalancerOutputs = LoadBalancerOutputs(
            dns_name=nlb.dns_name,
            zone_id=nlb.zone_id,
            static_ips=[eip.public_ip for eip in eips],
        )

        self.register_outputs(
            {
                "dns_name": self._outputs.dns_name,
                "zone_id": self._outputs.zone_id,
                "static_ips": self._outputs.static_ips,
            }
        )

    @property
    def outputs(self) -> LoadBalancerOutputs:
        """Return the resolved load balancer outputs."""
        return self._outputs
