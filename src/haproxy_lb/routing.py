"""
Routing specifications: what the proxy sends where
"""
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Tuple, Union

from .exceptions import DuplicateDomainError
from .orchestration import Service


def backend_name(service: Service) -> str:
    """Name of the HAProxy backend that serves `service`"""
    return service.name


@dataclass(frozen=True)
class SingleTarget:
    """Send every request to one service"""
    service: Service

    def services(self) -> List[Service]:
        return [self.service]


@dataclass(frozen=True)
class MultiTarget:
    """Pick the service by the request's Host header"""
    domains: Tuple[Tuple[str, Service], ...]

    def __init__(self, domains: Union[Mapping[str, Service], Iterable[Tuple[str, Service]]]):
        if isinstance(domains, Mapping):
            domains = domains.items()
        pairs = tuple((domain, service) for domain, service in domains)
        if not pairs:
            raise ValueError("Host routing needs at least one domain")

        # HAProxy compares the Host header case-insensitively
        seen = set()
        for domain, _ in pairs:
            key = domain.lower()
            if key in seen:
                raise DuplicateDomainError(domain)
            seen.add(key)

        object.__setattr__(self, 'domains', pairs)

    def services(self) -> List[Service]:
        """Distinct services in order of first appearance"""
        unique = {}
        for _, service in self.domains:
            unique.setdefault(backend_name(service), service)
        return list(unique.values())


RoutingSpec = Union[SingleTarget, MultiTarget]
