"""
Backend Rule Generation
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .config import ProxyConfig, DEFAULT_CONFIG
from .orchestration import Service
from .routing import backend_name
from .rendering import BACKENDS_TEMPLATE, section

logger = logging.getLogger(__name__)

# Algorithms HAProxy understands. Anything else is still written out and left
# for HAProxy to reject when it loads the file.
KNOWN_ALGORITHMS = {
    "roundrobin", "static-rr", "leastconn", "first", "source",
    "uri", "url_param", "hdr", "random", "rdp-cookie", "hash",
}


@dataclass
class ServerEntry:
    """One server line: a single endpoint of a backend"""
    id: str
    address: str
    port: int

    def __str__(self):
        return f"{self.address}:{self.port}"


@dataclass
class BackendDescriptor:
    """A backend block for one service"""
    name: str
    balance: str
    servers: List[ServerEntry] = field(default_factory=list)

    @classmethod
    def from_service(cls, service: Service, balance: str,
                     config: ProxyConfig = DEFAULT_CONFIG) -> 'BackendDescriptor':
        """Snapshot the service's endpoints into server entries"""
        name = backend_name(service)
        servers = [
            ServerEntry(f"{name}-{index}", address, config.internal_port)
            for index, address in enumerate(service.endpoints())
        ]
        return cls(name, balance, servers)


def is_known_algorithm(balance: str) -> bool:
    """Whether `balance` names a HAProxy balance algorithm"""
    words = balance.split()
    if not words:
        return False
    return words[0].split("(", 1)[0] in KNOWN_ALGORITHMS


def build_backends(services: List[Service], balance: str,
                   config: ProxyConfig = DEFAULT_CONFIG) -> List[BackendDescriptor]:
    """Describe one backend per service, in the order given"""
    if not services:
        raise ValueError("At least one service is required to build backends")

    if not is_known_algorithm(balance):
        logger.debug(f"Passing unrecognised balance algorithm {balance!r} through")

    backends = []
    for service in services:
        backend = BackendDescriptor.from_service(service, balance, config)
        if not backend.servers:
            logger.warning(f"Backend {backend.name} has no endpoints")
        else:
            logger.debug(f"Backend {backend.name}: {[str(s) for s in backend.servers]}")
        backends.append(backend)

    return backends


def render_backends(backends: List[BackendDescriptor],
                    config: ProxyConfig = DEFAULT_CONFIG) -> str:
    """Render backend descriptors as HAProxy backend sections"""
    return section(BACKENDS_TEMPLATE).render(
        backends=backends,
        cookie_name=config.cookie_name,
        resolvers=config.resolvers,
    )


def generate_backends(services: List[Service], balance: str,
                      config: Optional[ProxyConfig] = None) -> str:
    """Backend sections load balancing over `services` with sticky sessions"""
    config = config or DEFAULT_CONFIG
    return render_backends(build_backends(services, balance, config), config)
