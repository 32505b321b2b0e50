"""Map (scope, slug, command kind) to an output path."""

import os
from dataclasses import dataclass
from pathlib import Path

from git import Repo
from git.exc import InvalidGitRepositoryError, NoSuchPathError

from slashkit.command_spec import CommandSpec, Scope
from slashkit.errors import InvalidValue

USER_ROOT_ENV = "SLASHKIT_USER_ROOT"
PROJECT_ROOT_ENV = "SLASHKIT_PROJECT_ROOT"
CONFIG_DIR_NAME = ".claude"


@dataclass(frozen=True)
class Roots:
    """The two directories every target path is resolved under."""

    user: Path
    project: Path

    def for_scope(self, scope: Scope) -> Path:
        return self.user if scope == Scope.USER else self.project


@dataclass(frozen=True)
class ResolvedTarget:
    path: Path
    scope: Scope
    slug: str


def default_user_root() -> Path:
    return Path(os.path.expanduser("~")) / CONFIG_DIR_NAME


def default_project_root(cwd=None) -> Path:
    """Return ``<work tree>/.claude`` for the git repo enclosing *cwd*.

    Falls back to *cwd* itself when it is not inside a repository.
    """
    start = Path(cwd) if cwd is not None else Path.cwd()
    try:
        repo = Repo(start, search_parent_directories=True)
        top = repo.working_tree_dir
    except (InvalidGitRepositoryError, NoSuchPathError):
        top = None
    return Path(top or start) / CONFIG_DIR_NAME


def load_roots(user_root=None, project_root=None, cwd=None) -> Roots:
    """Build Roots from explicit values, falling back to the defaults."""
    user = Path(user_root).expanduser() if user_root else default_user_root()
    project = Path(project_root).expanduser() if project_root else default_project_root(cwd)
    return Roots(user=user, project=project)


def resolve_target(roots: Roots, scope: Scope, slug: str, spec: CommandSpec) -> ResolvedTarget:
    """Return the path *spec*'s artifact named *slug* is written to.

    Pure: the same inputs always give the same path and nothing is read
    from the environment or the filesystem. Raises InvalidValue when the
    root holds control or undecodable characters, which could not be
    reported on a single status line.
    """
    path = roots.for_scope(scope) / spec.subdir / spec.filename.format(slug=slug)
    if not str(path).isprintable():
        raise InvalidValue(f"The {scope.value} root contains control or non-UTF-8 characters")
    return ResolvedTarget(path=path, scope=scope, slug=slug)


def ensure_directory(path) -> None:
    """Create *path* and its parents; an existing directory is fine."""
    os.makedirs(path, exist_ok=True)
