"""AWS VPC implementation of StaticEndpointNetwork."""

from __future__ import annotations

import ipaddress
import logging

import pulumi
import pulumi_aws as aws

from static_endpoint_infra.components.network import NetworkOutputs

logger: logging.Logger = logging.getLogger(__name__)


class AwsNetworkArgs:
    """Arguments for the AWS network component.

    Args:
        availability_zones: Zones to spread subnets over, one pair per zone.
        cidr_block: VPC CIDR, carved into ``/28`` subnets.
    """

    def __init__(
        self,
        availability_zones: list[str],
        cidr_block: str = "10.10.10.0/24",
    ) -> None:
        self.availability_zones: list[str] = availability_zones
        self.cidr_block: str = cidr_block


class AwsNetwork(pulumi.ComponentResource):
    """AWS VPC + subnets + IGW satisfying ``StaticEndpointNetwork``.

    Each availability zone gets one public ``/28`` subnet (load balancer) and
    one isolated ``/28`` subnet (VPC endpoint interfaces). There is no NAT:
    nothing in the isolated subnets needs outbound internet access.
    """

    def __init__(
        self,
        name: str,
        args: AwsNetworkArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("static-endpoint:aws:Network", name, {}, opts)

        logger.debug(
            "provisioning_aws_network",
            extra={"name": name, "availability_zones": args.availability_zones},
        )

        blocks = _subnet_blocks(args.cidr_block, 2 * len(args.availability_zones))

        vpc = aws.ec2.Vpc(
            f"{name}-vpc",
            aws.ec2.VpcArgs(
                cidr_block=args.cidr_block,
                enable_dns_support=True,
                enable_dns_hostnames=True,
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        igw = aws.ec2.InternetGateway(
            f"{name}-igw",
            aws.ec2.InternetGatewayArgs(vpc_id=vpc.id),
            opts=pulumi.ResourceOptions(parent=self),
        )

        pub_rt = aws.ec2.RouteTable(
            f"{name}-pub-rt",
            aws.ec2.RouteTableArgs(
                vpc_id=vpc.id,
                routes=[
                    aws.ec2.RouteTableRouteArgs(
                        cidr_block="0.0.0.0/0",
                        gateway_id=igw.id,
                    )
                ],
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        iso_rt = aws.ec2.RouteTable(
            f"{name}-iso-rt",
            aws.ec2.RouteTableArgs(vpc_id=vpc.id),
            opts=pulumi.ResourceOptions(parent=self),
        )

        public_subnet_ids: list[pulumi.Output[str]] = []
        isolated_subnet_ids: list[pulumi.Output[str]] = []
        for index, zone in enumerate(args.availability_zones):
            suffix = zone[-1]
            pub = aws.ec2.Subnet(
                f"{name}-pub-{suffix}",
                aws.ec2.SubnetArgs(
                    vpc_id=vpc.id,
                    cidr_block=blocks[index],
                    availability_zone=zone,
                    map_public_ip_on_launch=True,
                ),
                opts=pulumi.ResourceOptions(parent=self),
            )
            iso = aws.ec2.Subnet(
                f"{name}-iso-{suffix}",
                aws.ec2.SubnetArgs(
                    vpc_id=vpc.id,
                    cidr_block=blocks[len(args.availability_zones) + index],
                    availability_zone=zone,
                ),
                opts=pulumi.ResourceOptions(parent=self),
            )
            aws.ec2.RouteTableAssociation(
                f"{name}-pub-rta-{suffix}",
                aws.ec2.RouteTableAssociationArgs(subnet_id=pub.id, route_table_id=pub_rt.id),
                opts=pulumi.ResourceOptions(parent=self),
            )
            aws.ec2.RouteTableAssociation(
                f"{name}-iso-rta-{suffix}",
                aws.ec2.RouteTableAssociationArgs(subnet_id=iso.id, route_table_id=iso_rt.id),
                opts=pulumi.ResourceOptions(parent=self),
            )
            public_subnet_ids.append(pub.id)
            isolated_subnet_ids.append(iso.id)

        self._outputs: NetworkOutputs = NetworkOutputs(
            vpc_id=vpc.id,
            public_subnet_ids=public_subnet_ids,
            isolated_subnet_ids=isolated_subnet_ids,
        )

        self.register_outputs(
            {
                "vpc_id": self._outputs.vpc_id,
                "public_subnet_ids": self._outputs.public_subnet_ids,
                "isolated_subnet_ids": self._outputs.isolated_subnet_ids,
            }
        )

    @property
    def outputs(self) -> NetworkOutputs:
        """Return the resolved network outputs."""
        return self._outputs


def _subnet_blocks(cidr_block: str, count: int) -> list[str]:
    """Split ``cidr_block`` into the first ``count`` ``/28`` blocks."""
    network = ipaddress.ip_network(cidr_block)
    blocks = [str(block) for block in network.subnets(new_prefix=28)]
    if count > len(blocks):
        raise ValueError(f"{cidr_block} cannot hold {count} /28 subnets")
    return blocks[:count]
