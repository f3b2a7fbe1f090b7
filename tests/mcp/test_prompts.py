"""Tests for MCP prompt rendering and registration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from unittest.mock import patch

import pytest

from interop.config.models import PromptConfig
from interop.mcp.prompts import prompts_for, register_prompts, render_prompt_impl


def _prompt(content: str, *arguments: dict[str, Any]) -> PromptConfig:
    return PromptConfig(name="p", content=content, arguments=list(arguments))


class TestRenderPrompt:
    def test_fills_arguments(self) -> None:
        prompt = _prompt("Review {file} for {focus}", {"name": "file"}, {"name": "focus"})
        assert render_prompt_impl(prompt, {"file": "a.py", "focus": "bugs"}) == (
            "Review a.py for bugs"
        )

    def test_defaults_used(self) -> None:
        prompt = _prompt("Depth {depth}", {"name": "depth", "type": "number", "default": 2})
        assert render_prompt_impl(prompt) == "Depth 2"

    def test_missing_optional_is_empty(self) -> None:
        assert render_prompt_impl(_prompt("[{x}]", {"name": "x"})) == "[]"

    def test_missing_required(self) -> None:
        prompt = _prompt("Hi {who}", {"name": "who", "required": True})
        with pytest.raises(ValueError, match="missing required argument 'who'"):
            render_prompt_impl(prompt, {"who": None})

    def test_unknown_braces_left_alone(self) -> None:
        prompt = _prompt('Return {"a": 1} for {x}', {"name": "x"})
        assert render_prompt_impl(prompt, {"x": "y"}) == 'Return {"a": 1} for y'


class TestPromptsFor:
    def test_server_assignment(self, make_settings) -> None:
        settings = make_settings(
            '[prompts.a]\ncontent = "A"\n'
            '[prompts.b]\ncontent = "B"\nmcp = "ops"\n'
        )
        assert [p.name for p in prompts_for(settings)] == ["a"]
        assert [p.name for p in prompts_for(settings, "ops")] == ["b"]


@dataclass
class FakePrompt:
    name: str
    description: str | None
    arguments: list[Any]
    fn: Any


@dataclass
class FakeArgument:
    name: str
    description: str | None
    required: bool


@dataclass
class PromptServer:
    prompts: list[FakePrompt] = field(default_factory=list)

    def add_prompt(self, prompt: FakePrompt) -> None:
        self.prompts.append(prompt)


class TestRegisterPrompts:
    def test_registers_with_arguments(self, make_settings) -> None:
        settings = make_settings(
            '[prompts.review]\ndescription = "Code review"\ncontent = "Review {file} {style}"\n'
            'arguments = [{ name = "file", required = true }, '
            '{ name = "style", required = true, default = "strict" }]\n'
        )
        server = PromptServer()
        with (
            patch("interop.mcp.prompts._Prompt", FakePrompt),
            patch("interop.mcp.prompts._PromptArgument", FakeArgument),
        ):
            names = register_prompts(server, settings)

        assert names == ["review"]
        prompt = server.prompts[0]
        assert prompt.description == "Code review"
        assert [(a.name, a.required) for a in prompt.arguments] == [
            ("file", True),
            ("style", False),
        ]
        assert prompt.fn(file="x.py") == "Review x.py strict"

    def test_requires_mcp(self, make_settings) -> None:
        with (
            patch("interop.mcp.prompts._Prompt", None),
            pytest.raises(RuntimeError, match="MCP extra not installed"),
        ):
            register_prompts(PromptServer(), make_settings(""))
