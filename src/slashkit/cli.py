"""Top-level Click group for the slashkit CLI."""

import click

from slashkit.catalog import COMMAND_SPECS
from slashkit.scaffold_command import scaffold_command
from slashkit.target_resolver import PROJECT_ROOT_ENV, USER_ROOT_ENV


@click.group()
@click.option("--user-root", envvar=USER_ROOT_ENV, metavar="DIR",
              help=f"User-level root (default ~/.claude, env {USER_ROOT_ENV}).")
@click.option("--project-root", envvar=PROJECT_ROOT_ENV, metavar="DIR",
              help=f"Project-level root (default <repo>/.claude, env {PROJECT_ROOT_ENV}).")
@click.pass_context
def main(ctx, user_root, project_root):
    """slashkit - scaffold slash commands, agents, skills and hooks."""
    ctx.obj = {"user_root": user_root, "project_root": project_root}


@main.command("kinds")
def kinds():
    """List the artifact kinds slashkit can scaffold."""
    for spec in COMMAND_SPECS.values():
        target = f"{spec.subdir}/{spec.filename.format(slug='<name>')}"
        click.echo(f"{spec.identifier:<8} {target:<26} {spec.summary}")


for _spec in COMMAND_SPECS.values():
    scaffold_command(main, _spec)
