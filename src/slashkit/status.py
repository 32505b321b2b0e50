"""Invocation outcomes and their single-line status records."""

import re
import shlex
from dataclasses import dataclass
from pathlib import Path

from slashkit.command_spec import CommandSpec, Scope


@dataclass(frozen=True)
class Created:
    path: Path
    scope: Scope
    values: dict


@dataclass(frozen=True)
class AlreadyExists:
    path: Path
    scope: Scope
    values: dict


@dataclass(frozen=True)
class Planned:
    """A ``--dry-run`` outcome: what would have been written, and where."""

    path: Path
    scope: Scope
    values: dict
    content: str


@dataclass(frozen=True)
class Failed:
    kind: str
    reason: str


_STATUS_WORDS = {
    Created: "OK",
    AlreadyExists: "EXISTS",
    Planned: "DRYRUN",
}

_PLAIN_VALUE = re.compile(r"^[^\s'\"\\]*$")


def is_success(result) -> bool:
    return not isinstance(result, Failed)


def format_status(result, spec: CommandSpec) -> str:
    """Render *result* as ``STATUS=<word> KEY=value ...``.

    Keys come in a fixed order: ``PATH SCOPE`` followed by the command's
    own status keys on success, ``COMMAND ERROR REASON`` on failure.
    """
    if isinstance(result, Failed):
        fields = [
            ("STATUS", "FAIL"),
            ("COMMAND", spec.identifier),
            ("ERROR", result.kind),
            ("REASON", _one_line(result.reason)),
        ]
    else:
        fields = [
            ("STATUS", _STATUS_WORDS[type(result)]),
            ("PATH", str(result.path)),
            ("SCOPE", result.scope.value),
        ]
        fields.extend((key.upper(), str(result.values.get(key, ""))) for key in spec.status_keys)
    return " ".join(f"{key}={_quote(value)}" for key, value in fields)


def parse_status(line: str) -> dict[str, str]:
    """Split a status line back into its key/value pairs, in order."""
    pairs = {}
    for token in shlex.split(line):
        key, _, value = token.partition("=")
        pairs[key] = value
    return pairs


def printable(text: str) -> str:
    """Escape control and undecodable characters so *text* stays on one line."""
    if text.isprintable():
        return text
    return "".join(ch if ch.isprintable() else repr(ch)[1:-1] for ch in text)


def _quote(value: str) -> str:
    value = printable(value)
    if _PLAIN_VALUE.match(value):
        return value
    return shlex.quote(value)


def _one_line(text: str) -> str:
    return " ".join(text.split())
