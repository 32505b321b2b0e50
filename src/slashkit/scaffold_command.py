"""Factory for Click commands that run a catalog CommandSpec."""

import sys

import click

from slashkit.command_spec import InvocationRequest
from slashkit.errors import InvalidValue
from slashkit.processor import ScaffoldOpts, process
from slashkit.status import Failed, Planned, format_status, is_success, printable
from slashkit.target_resolver import load_roots

_USAGE_ERROR_KEY = "slashkit.usage_error"


class _StatusCommand(click.Command):
    """A command whose parse errors still end in a status line."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            ctx.meta[_USAGE_ERROR_KEY] = exc.format_message()
            return []


def scaffold_command(group, spec):
    """Register a Click command on *group* that scaffolds *spec*'s artifact.

    Arguments are all optional and unknown options are passed through, so
    that the validator, not Click, reports every problem.
    """

    @click.pass_context
    def cmd(ctx, **params):
        usage_error = ctx.meta.get(_USAGE_ERROR_KEY)
        if usage_error:
            _emit(Failed(kind=InvalidValue.kind, reason=usage_error), spec)
            sys.exit(1)

        request = _build_request(spec, params, ctx.args)
        opts = ScaffoldOpts(
            dry_run=params.get("dry_run", False),
            prompter=_prompt if params.get("interactive") else None,
        )
        roots = load_roots(**(ctx.obj or {}))
        result = process(spec, request, roots, opts)
        _emit(result, spec)
        if not is_success(result):
            sys.exit(1)

    for option in reversed(_common_options()):
        cmd = option(cmd)
    for flag in reversed(spec.flags):
        cmd = _flag_option(flag)(cmd)
    for arg in reversed(spec.args):
        cmd = click.argument(arg.name, required=False, shell_complete=_choice_completer(arg))(cmd)

    command = group.command(
        spec.identifier,
        cls=_StatusCommand,
        help=_help_text(spec),
        context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    )(cmd)
    return command


def _common_options():
    return [
        click.option("--user", is_flag=True, help="Write under the user-level root."),
        click.option("--project", is_flag=True, help="Write under the project root (default)."),
        click.option("--interactive", is_flag=True, help="Prompt for missing required arguments."),
        click.option("--dry-run", is_flag=True, help="Show what would be written without writing."),
    ]


def _flag_option(flag):
    if flag.is_flag:
        return click.option(f"--{flag.name}", is_flag=True, help=flag.help)
    help_text = flag.help
    if flag.choices:
        help_text += f" One of: {', '.join(flag.choices)}."
    if flag.default:
        help_text += f" Default: {flag.default}."
    return click.option(f"--{flag.name}", default=None, metavar="TEXT", help=help_text)


def _choice_completer(arg):
    """Offer an enum slot's allowed values for shell completion."""
    if not arg.choices:
        return None

    def complete(_ctx, _param, incomplete):
        return [choice for choice in arg.choices if choice.lower().startswith(incomplete.lower())]

    return complete


def _help_text(spec):
    lines = [spec.summary, ""]
    for arg in spec.args:
        marker = "" if arg.required else " (optional)"
        line = f"{arg.name.upper()}{marker}: {arg.help}"
        if arg.choices:
            line += f" One of: {', '.join(arg.choices)}."
        lines.append(line)
        lines.append("")
    lines.append(f"Writes <root>/{spec.subdir}/{spec.filename.format(slug='<name>')}.")
    return "\n".join(lines)


def _build_request(spec, params, extra_args):
    args = [params.get(arg.name) or "" for arg in spec.args]
    flags = {flag.key: params.get(flag.key) for flag in spec.flags}
    flags["user"] = params.get("user", False)
    flags["project"] = params.get("project", False)
    for token in extra_args:
        if token.startswith("-"):
            flags[token.lstrip("-").split("=", 1)[0].replace("-", "_")] = True
        else:
            args.append(token)
    return InvocationRequest(args=tuple(args), flags=flags)


def _prompt(text):
    return click.prompt(text, default="", show_default=False)


def _emit(result, spec):
    if isinstance(result, Planned):
        click.echo(result.content, err=True, nl=False)
    if isinstance(result, Failed):
        click.echo(f"Error: {printable(result.reason)}", err=True)
    click.echo(format_status(result, spec))
