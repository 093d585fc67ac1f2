"""
HAProxy Load Balancer Package

This package generates HAProxy configuration for replicated services, with
sticky sessions and optional Host header routing.
"""

# Export main classes for easier importing
from .core import HAProxyLoadBalancer, single_service_load_balancer, with_host_routing
from .config import ProxyConfig, DEFAULT_CONFIG, EXPOSED_PORT
from .backend import BackendDescriptor, ServerEntry, generate_backends
from .frontend import FrontendRule, generate_default_frontend, generate_routing_frontend
from .assembler import assemble
from .routing import MultiTarget, RoutingSpec, SingleTarget
from .orchestration import ContainerSpec, Orchestrator, Service, StaticOrchestrator, StaticService
from .exceptions import DuplicateDomainError, HAProxyConfigError, TemplateLoadError

__version__ = "1.0.0"
__all__ = [
    "HAProxyLoadBalancer",
    "single_service_load_balancer",
    "with_host_routing",
    "ProxyConfig",
    "DEFAULT_CONFIG",
    "EXPOSED_PORT",
    "BackendDescriptor",
    "ServerEntry",
    "generate_backends",
    "FrontendRule",
    "generate_default_frontend",
    "generate_routing_frontend",
    "assemble",
    "MultiTarget",
    "RoutingSpec",
    "SingleTarget",
    "ContainerSpec",
    "Orchestrator",
    "Service",
    "StaticOrchestrator",
    "StaticService",
    "DuplicateDomainError",
    "HAProxyConfigError",
    "TemplateLoadError",
]
