"""
Replicated HAProxy Load Balancer
"""
import logging
from typing import Dict, List, Mapping, Optional

from .config import ProxyConfig, DEFAULT_CONFIG
from .backend import generate_backends
from .frontend import generate_frontend
from .assembler import create_config_files
from .orchestration import ContainerSpec, Orchestrator, Service
from .routing import MultiTarget, RoutingSpec, SingleTarget


class HAProxyLoadBalancer:
    """Generates HAProxy configuration and deploys it through an orchestrator"""

    def __init__(self, orchestrator: Orchestrator, config: ProxyConfig = None):
        self.orchestrator = orchestrator
        self.config = config or DEFAULT_CONFIG
        self.logger = self._setup_logging()
        self.proxies: List[Service] = []

    def _setup_logging(self):
        """Setup logging configuration"""
        logger = logging.getLogger('haproxy_lb')
        logger.setLevel(logging.INFO)

        if not logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def generate(self, routing: RoutingSpec, balance: str = None) -> Dict[str, str]:
        """Config files for `routing`, without deploying anything"""
        balance = balance or self.config.balance

        frontend_config = generate_frontend(routing)
        backend_config = generate_backends(routing.services(), balance, self.config)
        return create_config_files(frontend_config, backend_config, self.config)

    def create_proxy_service(self, replicas: int, services: List[Service],
                             files: Dict[str, str]) -> Service:
        """
        Deploy `replicas` HAProxy containers holding `files`.

        Every service behind the proxy is told to accept connections from it
        on the internal port.
        """
        if replicas < 1:
            raise ValueError(f"At least one HAProxy replica is required, got {replicas}")

        container = ContainerSpec(self.config.image, self.config.command(), dict(files))
        proxy = self.orchestrator.deploy(self.config.service_name, container, replicas)

        for service in services:
            service.allow_from(proxy, self.config.internal_port)

        self.proxies.append(proxy)
        self.logger.info(
            f"HAProxy deployed with {replicas} replicas in front of "
            f"{', '.join(str(s) for s in services)}"
        )
        return proxy

    def deploy(self, replicas: int, routing: RoutingSpec, balance: str = None) -> Service:
        """Generate the config for `routing` and deploy the proxy"""
        files = self.generate(routing, balance)
        return self.create_proxy_service(replicas, routing.services(), files)

    def single_service(self, replicas: int, service: Service, balance: str = None) -> Service:
        """Load balance over the instances of one service using sticky sessions"""
        return self.deploy(replicas, SingleTarget(service), balance)

    def with_host_routing(self, replicas: int, domain_to_service: Mapping[str, Service],
                          balance: str = None) -> Service:
        """Route by Host header, load balancing each service with sticky sessions"""
        return self.deploy(replicas, MultiTarget(domain_to_service), balance)

    def get_status(self) -> Dict:
        """Get the deployments made so far"""
        return {
            'image': self.config.image,
            'config_path': self.config.config_path,
            'exposed_port': self.config.exposed_port,
            'proxies': [str(proxy) for proxy in self.proxies],
        }


def single_service_load_balancer(orchestrator: Orchestrator, replicas: int, service: Service,
                                 balance: str = "roundrobin",
                                 config: Optional[ProxyConfig] = None) -> Service:
    """Replicated HAProxy load balancing over a single service"""
    return HAProxyLoadBalancer(orchestrator, config).single_service(replicas, service, balance)


def with_host_routing(orchestrator: Orchestrator, replicas: int,
                      domain_to_service: Mapping[str, Service],
                      balance: str = "roundrobin",
                      config: Optional[ProxyConfig] = None) -> Service:
    """Replicated HAProxy routing each domain to its own service"""
    return HAProxyLoadBalancer(orchestrator, config).with_host_routing(
        replicas, domain_to_service, balance
    )
