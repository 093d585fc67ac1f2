"""
Shared fixtures for the HAProxy config generation tests.
"""

import pytest

from haproxy_lb.config import ProxyConfig
from haproxy_lb.orchestration import StaticOrchestrator, StaticService

PREAMBLE = "frontend http-in\n    bind *:{{ port }}\n"


@pytest.fixture
def web():
    """A service with two replicas."""
    return StaticService("web", ["10.0.0.1", "10.0.0.2"])


@pytest.fixture
def svc_a():
    return StaticService("svcA", ["10.0.1.1"])


@pytest.fixture
def svc_b():
    return StaticService("svcB", ["10.0.2.1", "10.0.2.2"])


@pytest.fixture
def orchestrator():
    return StaticOrchestrator()


@pytest.fixture
def template_dir(tmp_path):
    """Directory holding a minimal preamble template."""
    (tmp_path / "haproxy.cfg").write_text(PREAMBLE)
    return tmp_path


@pytest.fixture
def config(template_dir):
    """Config using the minimal preamble and a non-default listening port."""
    return ProxyConfig(exposed_port=8080, template_dir=str(template_dir))
