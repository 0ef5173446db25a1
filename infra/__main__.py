"""Pulumi entry point for the static-IP IoT endpoint."""
import logging

import structlog

from static_endpoint_infra.__main__ import StaticEndpointStack
from static_endpoint_infra.config import StackConfig

structlog.configure(wrapper_class=structlog.make_filtering_bound_logger(logging.INFO))
StaticEndpointStack(config=StackConfig.load()).run()
