"""The table of scaffold commands slashkit knows how to run."""

from slashkit.command_spec import (
    RULE_ENUM,
    RULE_SLUG,
    RULE_TITLE,
    ArgSpec,
    CommandSpec,
    FlagSpec,
)

HOOK_EVENTS = (
    "PreToolUse",
    "PostToolUse",
    "UserPromptSubmit",
    "Notification",
    "Stop",
    "SubagentStop",
    "PreCompact",
    "SessionStart",
    "SessionEnd",
)

HOOK_PRESETS = {
    "blank": "",
    "format": "npx prettier --write",
    "lint": "npx eslint --fix",
    "test": "npm test --silent",
}

AGENT_MODELS = ("inherit", "sonnet", "opus", "haiku")

COMMAND = CommandSpec(
    identifier="command",
    summary="Create a slash command.",
    args=(
        ArgSpec("name", rule=RULE_TITLE, prompt="Command name",
                help="Command name; converted to a slug."),
        ArgSpec("description", required=False, prompt="Description",
                help="One-line description shown in the command menu."),
    ),
    flags=(
        FlagSpec("argument-hint", help="Hint shown for the command's arguments."),
        FlagSpec("allowed-tools", help="Comma-separated tools the command may use."),
        FlagSpec("model", help="Model override for the command."),
    ),
    subdir="commands",
    filename="{slug}.md",
    template="command.md.j2",
)

AGENT = CommandSpec(
    identifier="agent",
    summary="Create a sub-agent definition.",
    args=(
        ArgSpec("name", rule=RULE_SLUG, prompt="Agent name",
                help="Agent name (lowercase letters, digits, hyphens)."),
        ArgSpec("description", prompt="When should this agent be used?",
                help="When the agent should be used."),
    ),
    flags=(
        FlagSpec("model", help="Model the agent runs on.",
                 choices=AGENT_MODELS, default="inherit"),
        FlagSpec("tools", help="Comma-separated tools; omit to inherit all."),
        FlagSpec("color", help="Display color for the agent."),
    ),
    subdir="agents",
    filename="{slug}.md",
    template="agent.md.j2",
)

SKILL = CommandSpec(
    identifier="skill",
    summary="Create a skill directory with a SKILL.md.",
    args=(
        ArgSpec("name", rule=RULE_SLUG, prompt="Skill name",
                help="Skill name (lowercase letters, digits, hyphens)."),
        ArgSpec("description", prompt="What does the skill do and when is it used?",
                help="What the skill does and when to use it."),
    ),
    flags=(
        FlagSpec("with-scripts", is_flag=True, help="Also create a scripts/ directory."),
        FlagSpec("with-references", is_flag=True, help="Also create a references/ directory."),
        FlagSpec("with-assets", is_flag=True, help="Also create an assets/ directory."),
    ),
    subdir="skills",
    filename="{slug}/SKILL.md",
    template="skill.md.j2",
    bundled_dirs=(
        ("with_scripts", "scripts"),
        ("with_references", "references"),
        ("with_assets", "assets"),
    ),
)

HOOK = CommandSpec(
    identifier="hook",
    summary="Create an executable hook script.",
    args=(
        ArgSpec("name", rule=RULE_TITLE, prompt="Hook name",
                help="Hook name; converted to a slug."),
        ArgSpec("event", rule=RULE_ENUM, choices=HOOK_EVENTS, prompt="Hook event",
                help="Event the hook runs on."),
    ),
    flags=(
        FlagSpec("preset", help="Starting point for the hook body.",
                 choices=tuple(HOOK_PRESETS), default="blank"),
        FlagSpec("matcher", help="Tool matcher for tool-use events.", default="*"),
    ),
    subdir="hooks",
    filename="{slug}.sh",
    template="hook.sh.j2",
    executable=True,
    status_keys=("event",),
)

COMMAND_SPECS = {spec.identifier: spec for spec in (COMMAND, AGENT, SKILL, HOOK)}


def get_command_spec(identifier):
    """Return the CommandSpec for *identifier*; KeyError if unknown."""
    return COMMAND_SPECS[identifier]


def template_extras(spec, values):
    """Template values that come from the catalog rather than the caller."""
    if spec is HOOK:
        return {"preset_command": HOOK_PRESETS[values["preset"]]}
    return {}

