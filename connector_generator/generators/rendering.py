"""Jinja2 environment for the text documents (BPMN, README)."""
from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


@lru_cache
def get_environment() -> Environment:
    """Shared environment; ``.bpmn`` templates are XML-escaped, Markdown is not."""
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(enabled_extensions=("bpmn",), default_for_string=False, default=False),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render(template_name: str, **context) -> str:
    return get_environment().get_template(template_name).render(**context)
