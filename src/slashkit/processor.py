"""The scaffold pipeline: validate, resolve, render, write."""

from dataclasses import dataclass
from typing import Optional

from slashkit.catalog import template_extras
from slashkit.command_spec import CommandSpec, InvocationRequest
from slashkit.errors import ScaffoldError
from slashkit.status import Failed, Planned
from slashkit.target_resolver import Roots, resolve_target
from slashkit.templates.template_renderer import load_template, render
from slashkit.validator import Prompter, validate_request
from slashkit.writer import write_new_file


@dataclass
class ScaffoldOpts:
    """Per-invocation behaviour that is not part of the request itself."""

    dry_run: bool = False
    prompter: Optional[Prompter] = None


def process(spec: CommandSpec, request: InvocationRequest, roots: Roots, opts=None):
    """Run one invocation of *spec* and return its StatusResult.

    Every ScaffoldError is turned into Failed. Validation and rendering
    finish before anything touches the filesystem.
    """
    opts = opts or ScaffoldOpts()
    try:
        validated = validate_request(spec, request, opts.prompter)
        target = resolve_target(roots, validated.scope, validated.slug, spec)
        values = {**validated.values, **template_extras(spec, validated.values)}
        content = render(load_template(spec.template), values)
    except ScaffoldError as exc:
        return Failed(kind=exc.kind, reason=exc.reason)

    if opts.dry_run:
        return Planned(path=target.path, scope=target.scope, values=values, content=content)

    extra_dirs = [dirname for flag_key, dirname in spec.bundled_dirs if values.get(flag_key)]
    return write_new_file(target, content, executable=spec.executable, values=values,
                          extra_dirs=extra_dirs)
