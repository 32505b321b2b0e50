"""Table-driven validation of an InvocationRequest against its CommandSpec."""

from typing import Callable, Optional

from slashkit.command_spec import (
    DEFAULT_SCOPE,
    RULE_ENUM,
    RULE_SLUG,
    RULE_TITLE,
    CommandSpec,
    InvocationRequest,
    Scope,
    ValidatedRequest,
)
from slashkit.errors import (
    ConflictingFlags,
    InvalidEnumValue,
    InvalidValue,
    MissingArgument,
    UnexpectedArgument,
)
from slashkit.slug import slug_from_title, validate_slug

SCOPE_FLAGS = ("user", "project")

Prompter = Callable[[str], str]


def validate_request(
    spec: CommandSpec,
    request: InvocationRequest,
    prompter: Optional[Prompter] = None,
) -> ValidatedRequest:
    """Normalize *request* or raise the first violated constraint.

    Checks run in a fixed order: scope flags, unknown flags and surplus
    arguments, each argument slot in turn, then valued flags. When
    *prompter* is given, empty required slots are asked for instead of
    failing straight away.
    """
    scope = resolve_scope(request)
    _check_unknown(spec, request)

    values = {}
    for index, arg in enumerate(spec.args):
        raw = request.args[index] if index < len(request.args) else ""
        values[arg.name] = _validate_arg(arg, raw, prompter)

    for flag in spec.flags:
        values[flag.key] = _validate_flag(flag, request.flag(flag.key))

    slug = values[spec.name_arg.name]
    values["slug"] = slug
    values["scope"] = scope.value
    return ValidatedRequest(scope=scope, slug=slug, values=values)


def resolve_scope(request: InvocationRequest) -> Scope:
    """Pick the scope from ``--user``/``--project``; both set is an error."""
    user = bool(request.flag("user"))
    project = bool(request.flag("project"))
    if user and project:
        raise ConflictingFlags("--user and --project cannot be combined")
    if user:
        return Scope.USER
    if project:
        return Scope.PROJECT
    return DEFAULT_SCOPE


def _check_unknown(spec, request):
    known = {flag.key for flag in spec.flags} | set(SCOPE_FLAGS)
    unknown = sorted(key for key in request.flags if key not in known)
    if unknown:
        names = ", ".join("--" + key.replace("_", "-") for key in unknown)
        raise UnexpectedArgument(f"Unsupported flag(s) for {spec.identifier}: {names}")
    if len(request.args) > len(spec.args):
        surplus = " ".join(request.args[len(spec.args):])
        raise UnexpectedArgument(
            f"{spec.identifier} takes at most {len(spec.args)} argument(s); got extra: {surplus}"
        )


def _validate_arg(arg, raw, prompter):
    value = (raw or "").strip()
    if not value and arg.required and prompter is not None:
        value = (prompter(arg.prompt or arg.name) or "").strip()
    if not value:
        if arg.required:
            raise MissingArgument(f"Missing required argument: {arg.name.upper()}")
        return arg.default

    _require_utf8(arg.name, value)
    if arg.rule == RULE_SLUG:
        return validate_slug(value, arg.max_length)
    if arg.rule == RULE_TITLE:
        return slug_from_title(value, arg.max_length)
    if arg.rule == RULE_ENUM:
        return _match_choice(arg.name, value, arg.choices)
    return _single_line(arg.name, value)


def _validate_flag(flag, raw):
    if flag.is_flag:
        return bool(raw)
    value = "" if raw is None else str(raw).strip()
    if not value:
        return flag.default
    _require_utf8("--" + flag.name, value)
    if flag.choices:
        return _match_choice("--" + flag.name, value, flag.choices)
    return _single_line("--" + flag.name, value)


def _match_choice(label, value, choices):
    """Return the canonical spelling of *value*, matched case-insensitively."""
    for choice in choices:
        if choice.lower() == value.lower():
            return choice
    raise InvalidEnumValue(
        f"Invalid value for {label}: '{value}' (choose from {', '.join(choices)})"
    )


def _require_utf8(label, value):
    """Reject text that cannot be written out, such as undecodable argv bytes."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise InvalidValue(f"{label} is not valid UTF-8 text") from None


def _single_line(label, value):
    if "\n" in value or "\r" in value:
        raise InvalidValue(f"{label} must be a single line")
    return value
