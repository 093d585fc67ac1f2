"""
Jinja2 templates for the generated HAProxy sections

Every line of generated configuration goes through these templates so the
section layout and the escaping of user supplied values live in one place.
"""
import re
from typing import Optional

from jinja2 import (
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    Template,
    TemplateError,
)

from .exceptions import TemplateLoadError

PREAMBLE_TEMPLATE = "haproxy.cfg"

# Declarations must come before the use_backend lines that reference them.
HOST_ROUTING_TEMPLATE = """
{%- for rule in rules %}
    acl {{ rule.match_id }} hdr(host) -i {{ rule.domain | haproxy_escape }}
{%- endfor %}
{%- for rule in rules %}
    use_backend {{ rule.backend_name }} if {{ rule.match_id }}
{%- endfor %}"""

DEFAULT_BACKEND_TEMPLATE = """
    default_backend {{ backend_name }}"""

BACKENDS_TEMPLATE = """
{%- for backend in backends %}
backend {{ backend.name }}
    balance {{ backend.balance }}
    cookie {{ cookie_name }} insert indirect nocache
{%- for server in backend.servers %}
    server {{ server.id }} {{ server.address }}:{{ server.port }} check resolvers {{ resolvers }} cookie {{ server.id }}
{%- endfor %}
{% endfor %}"""

_SPECIAL = re.compile(r'([\\\s"\'#])')


def haproxy_escape(value) -> str:
    """Backslash-escape characters HAProxy treats as argument separators"""
    return _SPECIAL.sub(r'\\\1', str(value))


def _environment(loader=None) -> Environment:
    env = Environment(loader=loader, undefined=StrictUndefined, autoescape=False)
    env.filters['haproxy_escape'] = haproxy_escape
    return env


_sections = _environment()


def section(source: str) -> Template:
    """Compile one of the section templates above"""
    return _sections.from_string(source)


def load_preamble(template_dir: Optional[str] = None) -> Template:
    """
    Load the static global/defaults/frontend preamble.

    The packaged template is used unless `template_dir` names a directory
    holding its own haproxy.cfg.
    """
    try:
        if template_dir is None:
            loader = PackageLoader("haproxy_lb", "templates")
        else:
            loader = FileSystemLoader(template_dir)
        return _environment(loader).get_template(PREAMBLE_TEMPLATE)
    except (TemplateError, OSError, ValueError) as e:
        raise TemplateLoadError(f"Cannot load {PREAMBLE_TEMPLATE} template: {e}") from e
