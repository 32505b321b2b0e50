"""Load bundled Jinja2 templates and render them strictly."""

import importlib.resources
import json

import jinja2
from jinja2 import meta

from slashkit.errors import UnresolvedPlaceholder

_ENVIRONMENT = jinja2.Environment(
    undefined=jinja2.StrictUndefined,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
    autoescape=False,
)


def quoted(value) -> str:
    """Double-quote *value* so it reads back verbatim as a YAML string.

    Characters a YAML reader refuses to see raw are written as escapes.
    """
    text = json.dumps(str(value), ensure_ascii=False)
    return "".join(ch if ch.isprintable() else _escape(ch) for ch in text)


def _escape(ch):
    code = ord(ch)
    return f"\\u{code:04x}" if code <= 0xFFFF else f"\\U{code:08x}"


_ENVIRONMENT.filters["quoted"] = quoted


def load_template(template_name: str, *, package: str = "slashkit.templates") -> str:
    """Return the source of a template bundled in *package*.

    Raises:
        FileNotFoundError: If the template file does not exist
    """
    source = importlib.resources.files(package).joinpath(template_name)
    if not source.is_file():
        raise FileNotFoundError(f"Template not found: {template_name}")
    return source.read_text(encoding="utf-8")


def placeholders(source: str) -> set[str]:
    """Names of every variable *source* reads."""
    return meta.find_undeclared_variables(_ENVIRONMENT.parse(source))


def render(source: str, values: dict) -> str:
    """Substitute *values* into the template *source*.

    Pure and deterministic. Every placeholder must have a value: missing
    ones raise UnresolvedPlaceholder naming them, so no placeholder token
    ever reaches the output.
    """
    missing = placeholders(source) - set(values)
    if missing:
        raise UnresolvedPlaceholder(missing)
    try:
        return _ENVIRONMENT.from_string(source).render(**values)
    except jinja2.UndefinedError as exc:
        raise UnresolvedPlaceholder([str(exc)]) from exc
