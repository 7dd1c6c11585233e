"""
Jinja2 template-based rendering for reports, config skeletons and polyfill snippets.

Templates ending in `.html.j2` are autoescaped; everything else is rendered
verbatim (JavaScript, JSON, markdown).
"""

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pathlib import Path

_TEMPLATES_DIR = Path(__file__).parent


def _js_string(value: str) -> str:
    """Quote a value as a double-quoted JavaScript string literal."""
    escaped = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


_env = Environment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    autoescape=select_autoescape(enabled_extensions=("html.j2",), default_for_string=False),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=False,
)
_env.filters["js_string"] = _js_string


def render(template_name: str, **kwargs) -> str:
    """Render a template with given parameters.

    Args:
        template_name: Path relative to templates dir (e.g., "config/babel.config.js.j2")
        **kwargs: Template variables

    Returns:
        Rendered text
    """
    template = _env.get_template(template_name)
    return template.render(**kwargs)


def exists(template_name: str) -> bool:
    return (_TEMPLATES_DIR / template_name).is_file()
