"""
Assembles the final HAProxy configuration file
"""
import logging
from typing import Dict, Optional

from jinja2 import Template

from .config import ProxyConfig, DEFAULT_CONFIG
from .rendering import load_preamble

logger = logging.getLogger(__name__)


def assemble(preamble_template: Template, exposed_port: int, frontend_text: str,
             backend_text: str, config_path: str) -> Dict[str, str]:
    """
    Join the rendered preamble, frontend and backend sections.

    Frontend text starts on a new line of its own, so it directly continues
    the preamble's frontend section. Returns a map from the config path to
    the document, ready to be placed in each proxy container.
    """
    config = preamble_template.render(port=exposed_port)
    config += frontend_text + '\n' + backend_text

    logger.debug(f"Assembled {config_path} ({len(config)} bytes)")
    return {config_path: config}


def create_config_files(frontend_text: str, backend_text: str,
                        config: Optional[ProxyConfig] = None) -> Dict[str, str]:
    """Load the preamble template and assemble the config file"""
    config = config or DEFAULT_CONFIG
    preamble = load_preamble(config.template_dir)
    return assemble(preamble, config.exposed_port, frontend_text, backend_text, config.config_path)
