"""
Errors raised while generating HAProxy configuration
"""


class HAProxyConfigError(Exception):
    """Base class for configuration generation errors"""


class DuplicateDomainError(HAProxyConfigError, ValueError):
    """Two routing entries match the same Host header"""

    def __init__(self, domain: str):
        self.domain = domain
        super().__init__(f"Domain {domain!r} is routed more than once")


class TemplateLoadError(HAProxyConfigError):
    """The static configuration preamble could not be loaded"""
