"""Tests for four-tier environment merging."""

from __future__ import annotations

from interop.services.environment import merge_environment, to_env_list


class TestMergeEnvironment:
    def test_precedence(self) -> None:
        env = merge_environment(
            {"LOG_LEVEL": "command_error", "C": "c"},
            {"LOG_LEVEL": "project", "P": "p"},
            {"LOG_LEVEL": "global", "G": "g"},
            {"LOG_LEVEL": "inherited", "PATH": "/bin"},
        )
        assert env == {
            "LOG_LEVEL": "command_error",
            "C": "c",
            "P": "p",
            "G": "g",
            "PATH": "/bin",
        }

    def test_missing_tiers(self) -> None:
        assert merge_environment(None, None, {"A": "1"}, {}) == {"A": "1"}

    def test_defaults_to_process_env(self, monkeypatch) -> None:
        monkeypatch.setenv("INTEROP_TEST_MARKER", "yes")
        assert merge_environment()["INTEROP_TEST_MARKER"] == "yes"

    def test_inputs_not_mutated(self) -> None:
        inherited = {"A": "1"}
        merge_environment({"A": "2"}, inherited=inherited)
        assert inherited == {"A": "1"}


def test_to_env_list_sorted() -> None:
    assert to_env_list({"B": "2", "A": "1"}) == ["A=1", "B=2"]
