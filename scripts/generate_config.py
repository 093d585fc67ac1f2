#!/usr/bin/env python3
"""
HAProxy Config Generation Script
"""
import json
import sys
import os
from pathlib import Path

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from haproxy_lb import HAProxyLoadBalancer, ProxyConfig, StaticOrchestrator, StaticService
from haproxy_lb.routing import MultiTarget, SingleTarget


class ConfigGenerator:
    """Renders HAProxy config for a routing file"""

    def __init__(self, config_path: str = "config/haproxy.json"):
        self.config_path = config_path

    def load_config(self):
        """Load configuration from file"""
        if Path(self.config_path).exists():
            return ProxyConfig.from_json(self.config_path)
        else:
            print(f"Config file {self.config_path} not found, using default config", file=sys.stderr)
            return ProxyConfig()

    @staticmethod
    def load_routing(routing_path: str):
        """Read services and routing from a JSON file"""
        with open(routing_path, 'r') as f:
            data = json.load(f)

        services = {
            name: StaticService(name, endpoints)
            for name, endpoints in data.get('services', {}).items()
        }

        if 'domains' in data:
            routing = MultiTarget([
                (domain, services[name]) for domain, name in data['domains'].items()
            ])
        elif 'service' in data:
            routing = SingleTarget(services[data['service']])
        else:
            raise ValueError(f"{routing_path} needs either 'service' or 'domains'")

        return routing, data.get('balance')

    def render(self, routing_path: str) -> str:
        """Render the config document"""
        config = self.load_config()
        routing, balance = self.load_routing(routing_path)

        balancer = HAProxyLoadBalancer(StaticOrchestrator(), config)
        files = balancer.generate(routing, balance)
        return files[config.config_path]

    def create_default_config(self):
        """Create default configuration file"""
        ProxyConfig().to_json(self.config_path)
        print(f"Created default configuration file: {self.config_path}")


def main():
    """Main function"""
    if len(sys.argv) < 2:
        print("Usage:")
        print("  python scripts/generate_config.py render <routing_file> [config_file]")
        print("  python scripts/generate_config.py create-config [config_file]")
        sys.exit(1)

    command = sys.argv[1]

    if command == "render":
        if len(sys.argv) < 3:
            print("Usage: python scripts/generate_config.py render <routing_file> [config_file]")
            sys.exit(1)
        config_file = sys.argv[3] if len(sys.argv) > 3 else "config/haproxy.json"
        print(ConfigGenerator(config_file).render(sys.argv[2]))

    elif command == "create-config":
        config_file = sys.argv[2] if len(sys.argv) > 2 else "config/haproxy.json"
        ConfigGenerator(config_file).create_default_config()

    else:
        print(f"Unknown command: {command}")
        sys.exit(1)


if __name__ == "__main__":
    main()
