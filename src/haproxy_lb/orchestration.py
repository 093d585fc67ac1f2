"""
Interfaces to the orchestration layer that runs the proxy and its backends
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass
class ContainerSpec:
    """Image, command line and files for one proxy container"""
    image: str
    command: List[str]
    files: Dict[str, str] = field(default_factory=dict)


class Service(ABC):
    """A named, replicated service known to the orchestration layer"""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def endpoints(self) -> List[str]:
        """Current addresses of the service's replicas"""
        pass

    @abstractmethod
    def allow_from(self, other: 'Service', port: int):
        """Allow `other` to connect to this service on `port`"""
        pass

    def __str__(self):
        return self.name


class Orchestrator(ABC):
    """Deploys replicated containers as a service"""

    @abstractmethod
    def deploy(self, name: str, container: ContainerSpec, replicas: int) -> Service:
        """Start `replicas` copies of `container` and return them as one service"""
        pass


class StaticService(Service):
    """Service with a fixed endpoint list that records the access it grants"""

    def __init__(self, name: str, endpoints: Optional[List[str]] = None):
        super().__init__(name)
        self.addresses = list(endpoints or [])
        self.allowed: List[Tuple[str, int]] = []
        self.logger = logging.getLogger(__name__)

    def endpoints(self) -> List[str]:
        return list(self.addresses)

    def allow_from(self, other: Service, port: int):
        self.allowed.append((other.name, port))
        self.logger.debug(f"Allowed {other.name} -> {self.name}:{port}")

    def update_endpoints(self, endpoints: List[str]):
        """Replace the endpoint list"""
        self.addresses = list(endpoints)


class ProxyService(StaticService):
    """Handle for a deployed proxy made of `replicas` identical containers"""

    def __init__(self, name: str, container: ContainerSpec, replicas: int):
        super().__init__(name, [f"{name}-{i}" for i in range(replicas)])
        self.container = container
        self.replicas = replicas


class StaticOrchestrator(Orchestrator):
    """Orchestrator that records deployments instead of running them"""

    def __init__(self):
        self.deployments: List[ProxyService] = []
        self.logger = logging.getLogger(__name__)

    def deploy(self, name: str, container: ContainerSpec, replicas: int) -> Service:
        service = ProxyService(name, container, replicas)
        self.deployments.append(service)
        self.logger.info(f"Deployed {replicas} x {container.image} as {name}")
        return service
