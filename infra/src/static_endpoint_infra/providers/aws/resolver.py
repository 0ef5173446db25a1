"""AWS Lambda + CloudFormation custom resource implementation of StaticEndpointResolver."""

from __future__ import annotations

import json
import logging

import pulumi
import pulumi_aws as aws

from static_endpoint_infra.components.resolver import ResolverOutputs

logger: logging.Logger = logging.getLogger(__name__)

_HANDLER = "static_endpoint_infra.resolver.handler.lambda_handler"
_RUNTIME = "python3.12"
_CUSTOM_RESOURCE = "NetworkInterfaceIps"


def _custom_resource_template(function_arn: str, interface_ids: list[str], address_count: int) -> str:
    """Render the CloudFormation template that drives the resolver function.

    Outputs ``Ip0`` .. ``Ip{address_count - 1}`` select positions from the
    ``IPs`` attribute the function reports, so the order of ``interface_ids``
    is the order of the outputs.
    """
    outputs = {
        f"Ip{position}": {
            "Value": {"Fn::Select": [position, {"Fn::GetAtt": [_CUSTOM_RESOURCE, "IPs"]}]}
        }
        for position in range(address_count)
    }
    return json.dumps(
        {
            "AWSTemplateFormatVersion": "2010-09-09",
            "Description": "Private addresses of the endpoint network interfaces.",
            "Resources": {
                _CUSTOM_RESOURCE: {
                    "Type": f"Custom::{_CUSTOM_RESOURCE}",
                    "Properties": {
                        "ServiceToken": function_arn,
                        "NetworkInterfaceIds": interface_ids,
                    },
                }
            },
            "Outputs": outputs,
        }
    )


class AwsResolverArgs:
    """Arguments for the AWS resolver component.

    Args:
        network_interface_ids: Interfaces to resolve, in target order.
        address_count: How many addresses downstream consumers select; must not
            exceed the number of interfaces.
        code_path: Directory holding the packaged handler and its dependencies.
        timeout_seconds: Function timeout. CloudFormation waits for the
            response, so this bounds a stuck deployment.
        log_level: ``ENI_RESOLVER_LOG_LEVEL`` for the function.
    """

    def __init__(
        self,
        network_interface_ids: pulumi.Input[list[str]],
        address_count: int,
        code_path: str,
        timeout_seconds: int = 10,
        log_level: str = "INFO",
    ) -> None:
        self.network_interface_ids: pulumi.Input[list[str]] = network_interface_ids
        self.address_count: int = address_count
        self.code_path: str = code_path
        self.timeout_seconds: int = timeout_seconds
        self.log_level: str = log_level


class AwsResolver(pulumi.ComponentResource):
    """Resolver function + custom resource satisfying ``StaticEndpointResolver``.

    Provisions a least-privilege IAM role, a log group, the resolver function,
    and a CloudFormation stack whose ``Custom::NetworkInterfaceIps`` resource
    invokes the function on every create, update and delete.
    """

    def __init__(
        self,
        name: str,
        args: AwsResolverArgs,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("static-endpoint:aws:Resolver", name, {}, opts)

        logger.debug(
            "provisioning_aws_resolver",
            extra={"name": name, "address_count": args.address_count},
        )

        function_name = f"{name}-fn"

        log_group = aws.cloudwatch.LogGroup(
            f"{name}-logs",
            aws.cloudwatch.LogGroupArgs(name=f"/aws/lambda/{function_name}", retention_in_days=30),
            opts=pulumi.ResourceOptions(parent=self),
        )

        role = aws.iam.Role(
            f"{name}-role",
            aws.iam.RoleArgs(
                assume_role_policy=json.dumps(
                    {
                        "Version": "2012-10-17",
                        "Statement": [
                            {
                                "Effect": "Allow",
                                "Principal": {"Service": "lambda.amazonaws.com"},
                                "Action": "sts:AssumeRole",
                            }
                        ],
                    }
                ),
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        policy = aws.iam.RolePolicy(
            f"{name}-policy",
            aws.iam.RolePolicyArgs(
                role=role.name,
                policy=log_group.arn.apply(
                    lambda arn: json.dumps(
                        {
                            "Version": "2012-10-17",
                            "Statement": [
                                {
                                    # Interface ids are only known after the endpoint exists.
                                    "Effect": "Allow",
                                    "Action": [
                                        "ec2:DescribeNetworkInterfaces",
                                        "ec2:DescribeNetworkInterfaceAttribute",
                                    ],
                                    "Resource": "*",
                                },
                                {
                                    "Effect": "Allow",
                                    "Action": ["logs:CreateLogStream", "logs:PutLogEvents"],
                                    "Resource": f"{arn}:*",
                                },
                            ],
                        }
                    )
                ),
            ),
            opts=pulumi.ResourceOptions(parent=self),
        )

        function = aws.lambda_.Function(
            f"{name}-function",
            aws.lambda_.FunctionArgs(
                name=function_name,
                role=role.arn,
                runtime=_RUNTIME,
                handler=_HANDLER,
                code=pulumi.FileArchive(args.code_path),
                timeout=args.timeout_seconds,
                memory_size=128,
                environment=aws.lambda_.FunctionEnvironmentArgs(
                    variables={"ENI_RESOLVER_LOG_LEVEL": args.log_level},
                ),
            ),
            opts=pulumi.ResourceOptions(parent=self, depends_on=[policy, log_group]),
        )

        address_count = args.address_count
        template = pulumi.Output.all(function.arn, args.network_interface_ids).apply(
            lambda values: _custom_resource_template(values[0], list(values[1]), address_count)
        )

        stack = aws.cloudformation.Stack(
            f"{name}-stack",
            aws.cloudformation.StackArgs(
                name=f"{name}-interface-ips",
                template_body=template,
                timeout_in_minutes=5,
            ),
            opts=pulumi.ResourceOptions(parent=self, depends_on=[function]),
        )

        self._outputs: ResolverOutputs = ResolverOutputs(
            function_arn=function.arn,
            addresses=[
                stack.outputs.apply(lambda values, key=f"Ip{position}": values[key])
                for position in range(args.address_count)
            ],
        )

        self.register_outputs(
            {
                "function_arn": self._outputs.function_arn,
                "addresses": self._outputs.addresses,
            }
        )

    @property
    def outputs(self) -> ResolverOutputs:
        """Return the resolved resolver outputs."""
        return self._outputs
