"""Jinja2 environment for admin pages."""

import logging
import os
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


@lru_cache
def get_template_env() -> Environment:
    template_path = Path(os.getenv("TEMPLATE_DIR", str(DEFAULT_TEMPLATE_DIR)))
    if not template_path.exists():
        logger.warning("Template directory not found: %s, using bundled templates", template_path)
        template_path = DEFAULT_TEMPLATE_DIR
    return Environment(
        loader=FileSystemLoader(str(template_path)),
        autoescape=select_autoescape(["html"]),
    )


def render(template_name: str, **context) -> str:
    return get_template_env().get_template(template_name).render(**context)
