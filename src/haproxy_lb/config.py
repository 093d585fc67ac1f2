"""
HAProxy Load Balancer Configuration
"""
import json
from dataclasses import asdict, dataclass
from typing import List, Optional


@dataclass
class ProxyConfig:
    """Fixed settings for the generated HAProxy deployment"""
    image: str = "haproxy:1.7"
    config_path: str = "/usr/local/etc/haproxy/haproxy.cfg"
    pid_path: str = "/run/haproxy.pid"
    internal_port: int = 80  # port HAProxy uses to reach the backends
    exposed_port: int = 80  # port HAProxy listens on
    cookie_name: str = "SERVERID"
    resolvers: str = "dns"
    balance: str = "roundrobin"
    service_name: str = "haproxy"
    template_dir: Optional[str] = None

    def command(self) -> List[str]:
        """Command line the proxy containers are started with"""
        return ['haproxy-systemd-wrapper', '-p', self.pid_path, '-f', self.config_path]

    @classmethod
    def from_json(cls, config_path: str) -> 'ProxyConfig':
        """Load configuration from JSON file"""
        with open(config_path, 'r') as f:
            data = json.load(f)

        return cls(**data)

    def to_json(self, config_path: str):
        """Save configuration to JSON file"""
        with open(config_path, 'w') as f:
            json.dump(asdict(self), f, indent=2)


# Default configuration
DEFAULT_CONFIG = ProxyConfig()

EXPOSED_PORT = DEFAULT_CONFIG.exposed_port
