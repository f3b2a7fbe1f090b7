"""Tests for command rendering."""

from __future__ import annotations

from interop.domain.commands import ArgumentDefinition
from interop.domain.types import ArgumentType
from interop.services.binding import bind_mapping, bind_tokens
from interop.services.rendering import format_value, render_command, substitute


def _render(template: str, defs: list[ArgumentDefinition], tokens: list[str], **kw) -> str:
    return render_command(template, defs, bind_tokens(defs, tokens), **kw)


class TestFormatValue:
    def test_bools_lowercase(self) -> None:
        assert format_value(True) == "true"
        assert format_value(False) == "false"

    def test_integral_float(self) -> None:
        assert format_value(3.0) == "3"
        assert format_value(2.5) == "2.5"

    def test_string_unchanged(self) -> None:
        assert format_value("a b") == "a b"


class TestSubstitute:
    def test_unknown_placeholders_stay(self) -> None:
        assert substitute("a ${x} ${y}", {"x": "1"}) == "a 1 ${y}"

    def test_single_pass(self) -> None:
        # A substituted value that looks like a placeholder is not expanded again.
        assert substitute("${a} ${b}", {"a": "${b}", "b": "2"}) == "${b} 2"


class TestRenderCommand:
    def test_placeholder_filled(self) -> None:
        defs = [ArgumentDefinition(name="env")]
        assert _render("deploy --env ${env}", defs, ["env=prod"]) == "deploy --env prod"

    def test_positional_appended_without_placeholder(self) -> None:
        defs = [
            ArgumentDefinition(name="output_file", required=True),
            ArgumentDefinition(name="package", default="./cmd/app"),
        ]
        assert _render("go build", defs, ["myfile"]) == "go build myfile"

    def test_default_fills_its_placeholder(self) -> None:
        defs = [ArgumentDefinition(name="package", default="./cmd/app")]
        assert _render("go build ${package}", defs, []) == "go build ./cmd/app"

    def test_bool_prefix_present_once_when_true(self) -> None:
        defs = [ArgumentDefinition(name="force", type=ArgumentType.BOOL, prefix="--force")]
        assert _render("push", defs, ["force=true"]) == "push --force"
        assert _render("push", defs, ["force=false"]) == "push"
        assert _render("push", defs, []) == "push"

    def test_valued_prefix(self) -> None:
        defs = [ArgumentDefinition(name="count", type=ArgumentType.NUMBER, prefix="-n")]
        assert _render("head", defs, ["count=10"]) == "head -n 10"

    def test_prefix_wins_over_placeholder(self) -> None:
        defs = [ArgumentDefinition(name="out", prefix="-o")]
        assert _render("cc ${out}", defs, ["out=a.out"]) == "cc ${out} -o a.out"

    def test_ordering_positional_extras_prefixed_trailing(self) -> None:
        defs = [
            ArgumentDefinition(name="src"),
            ArgumentDefinition(name="verbose", type=ArgumentType.BOOL, prefix="-v"),
        ]
        out = _render("tool", defs, ["a", "b", "verbose=1", "mode=x"])
        assert out == "tool a b -v mode=x"

    def test_undeclared_fills_placeholder(self) -> None:
        assert _render("echo ${who}", [], ["who=world"]) == "echo world"

    def test_mapping_path_drops_unplaced_undeclared(self) -> None:
        bound = bind_mapping([], {"who": "world", "junk": "x"})
        out = render_command("echo ${who}", [], bound, pass_through=False)
        assert out == "echo world"

    def test_values_are_not_quoted(self) -> None:
        defs = [ArgumentDefinition(name="msg")]
        assert _render("echo ${msg}", defs, ["msg=a b"]) == "echo a b"
