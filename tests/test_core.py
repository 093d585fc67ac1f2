"""
Tests for the replicated HAProxy load balancer.
"""

import pytest

from haproxy_lb import EXPOSED_PORT
from haproxy_lb.core import HAProxyLoadBalancer, single_service_load_balancer, with_host_routing
from haproxy_lb.config import ProxyConfig
from haproxy_lb.routing import MultiTarget, SingleTarget


class TestSingleServiceLoadBalancer:
    """Tests for load balancing over one service."""

    def test_document(self, orchestrator, web, config):
        proxy = single_service_load_balancer(orchestrator, 2, web, config=config)

        assert proxy.container.files == {
            config.config_path: (
                "frontend http-in"
                "\n    bind *:8080"
                "\n    default_backend web"
                "\n"
                "\nbackend web"
                "\n    balance roundrobin"
                "\n    cookie SERVERID insert indirect nocache"
                "\n    server web-0 10.0.0.1:80 check resolvers dns cookie web-0"
                "\n    server web-1 10.0.0.2:80 check resolvers dns cookie web-1"
                "\n"
            ),
        }

    def test_deployment(self, orchestrator, web, config):
        proxy = single_service_load_balancer(orchestrator, 3, web, config=config)

        assert orchestrator.deployments == [proxy]
        assert proxy.name == "haproxy"
        assert proxy.replicas == 3
        assert proxy.container.image == "haproxy:1.7"
        assert proxy.container.command == [
            "haproxy-systemd-wrapper", "-p", "/run/haproxy.pid",
            "-f", "/usr/local/etc/haproxy/haproxy.cfg",
        ]
        assert web.allowed == [("haproxy", 80)]

    def test_no_host_rules(self, orchestrator, web, config):
        proxy = single_service_load_balancer(orchestrator, 1, web, "source", config)
        document = proxy.container.files[config.config_path]

        assert document.count("default_backend") == 1
        assert "hdr(host)" not in document
        assert "balance source" in document

    def test_packaged_template(self, orchestrator, web):
        proxy = single_service_load_balancer(orchestrator, 1, web)
        document = proxy.container.files["/usr/local/etc/haproxy/haproxy.cfg"]

        assert f"bind *:{EXPOSED_PORT}\n    default_backend web\n" in document

    def test_zero_replicas_rejected(self, orchestrator, web, config):
        with pytest.raises(ValueError):
            single_service_load_balancer(orchestrator, 0, web, config=config)
        assert orchestrator.deployments == []


class TestHostRouting:
    """Tests for routing by Host header."""

    def test_rules_and_backends(self, orchestrator, svc_a, svc_b, config):
        proxy = with_host_routing(orchestrator, 2, {"a.com": svc_a, "b.com": svc_b}, config=config)
        document = proxy.container.files[config.config_path]

        assert (
            "\n    acl svcA_req hdr(host) -i a.com"
            "\n    acl svcB_req hdr(host) -i b.com"
            "\n    use_backend svcA if svcA_req"
            "\n    use_backend svcB if svcB_req"
            "\n"
            "\nbackend svcA"
        ) in document
        assert document.count("\nbackend ") == 2
        assert "default_backend" not in document

    def test_shared_service_gets_one_backend(self, orchestrator, svc_a, svc_b, config):
        domains = {"a.com": svc_a, "www.a.com": svc_a, "b.com": svc_b}

        proxy = with_host_routing(orchestrator, 1, domains, config=config)
        document = proxy.container.files[config.config_path]

        assert document.count("hdr(host) -i") == 3
        assert document.count("use_backend") == 3
        assert document.count("\nbackend ") == 2
        assert svc_a.allowed == [("haproxy", 80)]
        assert svc_b.allowed == [("haproxy", 80)]


class TestHAProxyLoadBalancer:
    """Tests for config generation without deployment."""

    def test_generation_is_idempotent(self, orchestrator, svc_a, svc_b, config):
        balancer = HAProxyLoadBalancer(orchestrator, config)
        routing = MultiTarget({"a.com": svc_a, "b.com": svc_b})

        assert balancer.generate(routing) == balancer.generate(routing)
        assert orchestrator.deployments == []

    def test_default_balance_from_config(self, orchestrator, web, template_dir):
        config = ProxyConfig(balance="leastconn", template_dir=str(template_dir))
        balancer = HAProxyLoadBalancer(orchestrator, config)

        files = balancer.generate(SingleTarget(web))

        assert "balance leastconn" in files[config.config_path]

    def test_internal_port_used_for_servers_and_access(self, orchestrator, web, template_dir):
        config = ProxyConfig(internal_port=8000, template_dir=str(template_dir))

        HAProxyLoadBalancer(orchestrator, config).single_service(1, web)

        document = orchestrator.deployments[0].container.files[config.config_path]
        assert "10.0.0.1:8000" in document
        assert web.allowed == [("haproxy", 8000)]

    def test_status(self, orchestrator, web, config):
        balancer = HAProxyLoadBalancer(orchestrator, config)
        balancer.single_service(2, web)

        status = balancer.get_status()

        assert status['proxies'] == ["haproxy"]
        assert status['exposed_port'] == 8080
