"""Tests for the table-driven argument validator."""

import pytest

from slashkit.catalog import AGENT, COMMAND, HOOK, SKILL
from slashkit.command_spec import InvocationRequest, Scope
from slashkit.errors import (
    ConflictingFlags,
    InvalidEnumValue,
    InvalidName,
    InvalidValue,
    MissingArgument,
    UnexpectedArgument,
)
from slashkit.validator import validate_request


def _request(*args, **flags):
    return InvocationRequest(args=args, flags=flags)


@pytest.mark.unit
class TestScope:

    def test_defaults_to_project(self):
        validated = validate_request(COMMAND, _request("deploy"))
        assert validated.scope == Scope.PROJECT

    def test_user_flag_selects_user_scope(self):
        validated = validate_request(COMMAND, _request("deploy", user=True))
        assert validated.scope == Scope.USER
        assert validated.values["scope"] == "user"

    @pytest.mark.parametrize("spec, args", [
        (COMMAND, ("deploy",)),
        (AGENT, ("Not A Slug",)),
        (HOOK, ()),
        (SKILL, ("ok", "desc", "surplus")),
    ])
    def test_both_scope_flags_conflict_regardless_of_arguments(self, spec, args):
        with pytest.raises(ConflictingFlags):
            validate_request(spec, _request(*args, user=True, project=True, bogus=True))


@pytest.mark.unit
class TestRequiredArguments:

    def test_missing_required_argument(self):
        with pytest.raises(MissingArgument, match="NAME"):
            validate_request(COMMAND, _request())

    def test_blank_required_argument_counts_as_missing(self):
        with pytest.raises(MissingArgument, match="DESCRIPTION"):
            validate_request(AGENT, _request("reviewer", "   "))

    def test_optional_argument_may_be_omitted(self):
        validated = validate_request(COMMAND, _request("deploy"))
        assert validated.values["description"] == ""

    def test_prompter_fills_missing_required_argument(self):
        asked = []

        def prompter(text):
            asked.append(text)
            return "Reviews pull requests"

        validated = validate_request(AGENT, _request("reviewer"), prompter)

        assert validated.values["description"] == "Reviews pull requests"
        assert asked == ["When should this agent be used?"]

    def test_blank_prompt_answer_is_still_missing(self):
        with pytest.raises(MissingArgument):
            validate_request(AGENT, _request(), lambda _text: "")


@pytest.mark.unit
class TestNames:

    def test_title_rule_converts_to_slug(self):
        validated = validate_request(COMMAND, _request("My Tool"))
        assert validated.slug == "my-tool"
        assert validated.values["name"] == "my-tool"
        assert validated.values["slug"] == "my-tool"

    @pytest.mark.parametrize("name", ["My Agent", "my_agent", "Reviewer", "a" * 65])
    def test_slug_rule_rejects_non_canonical_names(self, name):
        with pytest.raises(InvalidName):
            validate_request(AGENT, _request(name, "desc"))

    def test_slug_rule_accepts_canonical_name(self):
        validated = validate_request(SKILL, _request("pdf-tools", "Work with PDFs"))
        assert validated.slug == "pdf-tools"


@pytest.mark.unit
class TestEnums:

    def test_enum_argument_accepts_allowed_value(self):
        validated = validate_request(HOOK, _request("Format Files", "PostToolUse"))
        assert validated.values["event"] == "PostToolUse"

    def test_enum_argument_match_is_case_insensitive(self):
        validated = validate_request(HOOK, _request("fmt", "posttooluse"))
        assert validated.values["event"] == "PostToolUse"

    def test_enum_argument_rejects_unknown_value(self):
        with pytest.raises(InvalidEnumValue, match="OnSave"):
            validate_request(HOOK, _request("fmt", "OnSave"))

    def test_enum_flag_defaults_when_absent(self):
        validated = validate_request(HOOK, _request("fmt", "Stop"))
        assert validated.values["preset"] == "blank"
        assert validated.values["matcher"] == "*"

    def test_enum_flag_rejects_unknown_value(self):
        with pytest.raises(InvalidEnumValue, match="--model"):
            validate_request(AGENT, _request("reviewer", "desc", model="gpt"))


@pytest.mark.unit
class TestUnexpectedInput:

    def test_unknown_flag(self):
        with pytest.raises(UnexpectedArgument, match="--force"):
            validate_request(COMMAND, _request("deploy", force=True))

    def test_surplus_positional(self):
        with pytest.raises(UnexpectedArgument, match="extra"):
            validate_request(COMMAND, _request("deploy", "desc", "extra"))

    def test_multiline_text_is_rejected(self):
        with pytest.raises(InvalidValue):
            validate_request(AGENT, _request("reviewer", "line one\nline two"))


@pytest.mark.unit
class TestUndecodableText:

    @pytest.mark.parametrize("spec, args", [
        (COMMAND, ("caf\udcff",)),
        (AGENT, ("reviewer", "caf\udcff")),
        (HOOK, ("fmt", "Stop\udcff")),
    ])
    def test_undecodable_argument_is_rejected(self, spec, args):
        with pytest.raises(InvalidValue, match="UTF-8"):
            validate_request(spec, _request(*args))

    def test_undecodable_flag_value_is_rejected(self):
        with pytest.raises(InvalidValue, match="--argument-hint"):
            validate_request(COMMAND, _request("deploy", argument_hint="[caf\udcff]"))

    def test_non_ascii_text_is_accepted(self):
        validated = validate_request(SKILL, _request("pdf-tools", "Fülle Formulare aus"))
        assert validated.values["description"] == "Fülle Formulare aus"


@pytest.mark.unit
class TestBooleanFlags:

    def test_boolean_flags_are_normalized(self):
        validated = validate_request(SKILL, _request("pdf-tools", "desc", with_scripts=True))
        assert validated.values["with_scripts"] is True
        assert validated.values["with_assets"] is False
