"""
Frontend Rule Generation
"""
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Tuple, Union

from .orchestration import Service
from .routing import MultiTarget, RoutingSpec, SingleTarget, backend_name
from .rendering import DEFAULT_BACKEND_TEMPLATE, HOST_ROUTING_TEMPLATE, section


@dataclass
class FrontendRule:
    """Route requests for `domain` to `backend_name`"""
    match_id: str
    domain: str
    backend_name: str

    @classmethod
    def for_domain(cls, domain: str, service: Service) -> 'FrontendRule':
        name = backend_name(service)
        return cls(f"{name}_req", domain, name)


def build_routing_rules(routing: MultiTarget) -> List[FrontendRule]:
    """One rule per domain, in routing order"""
    return [FrontendRule.for_domain(domain, service) for domain, service in routing.domains]


def generate_default_frontend(service: Service) -> str:
    """A frontend that sends every request to `service`"""
    return section(DEFAULT_BACKEND_TEMPLATE).render(backend_name=backend_name(service))


def generate_routing_frontend(
    domain_to_service: Union[MultiTarget, Mapping[str, Service], Iterable[Tuple[str, Service]]]
) -> str:
    """Host header rules choosing a backend per domain"""
    if not isinstance(domain_to_service, MultiTarget):
        domain_to_service = MultiTarget(domain_to_service)

    rules = build_routing_rules(domain_to_service)
    return section(HOST_ROUTING_TEMPLATE).render(rules=rules)


def generate_frontend(routing: RoutingSpec) -> str:
    """Frontend rules for either routing variant"""
    if isinstance(routing, SingleTarget):
        return generate_default_frontend(routing.service)
    if isinstance(routing, MultiTarget):
        return generate_routing_frontend(routing)
    raise TypeError(f"Unsupported routing specification: {routing!r}")
