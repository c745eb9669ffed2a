"""Tests for AI agent detection from environment signals."""

import pytest

from commit_msg.core.agents import (
    AGENT_RULES,
    Agent,
    EnvRule,
    ExactValue,
    Substring,
    Truthy,
    clear_agent_env,
    detect_agent,
    get_co_developed_by,
)

CLAUDE = "Claude <noreply@anthropic.com>"
CURSOR = "Cursor <noreply@cursor.com>"
QODER = "Qoder <noreply@qoder.com>"


class TestPatterns:
    def test_exact_value(self):
        assert ExactValue("1").matches("1") is True
        assert ExactValue("1").matches("true") is False

    @pytest.mark.parametrize("value", ["abc123", "1", "FALSE", "No"])
    def test_truthy_accepts(self, value):
        assert Truthy().matches(value) is True

    @pytest.mark.parametrize("value", ["", "0", "false", "no"])
    def test_truthy_rejects_sentinels(self, value):
        assert Truthy().matches(value) is False

    def test_substring(self):
        assert Substring("/.cursor-server/").matches("/home/u/.cursor-server/bin/x") is True
        assert Substring("/.cursor-server/").matches("/path/to/cursor-server/askpass") is False


class TestGetCoDevelopedBy:
    @pytest.mark.parametrize(
        "env, expected",
        [
            ({"CLAUDECODE": "1"}, CLAUDE),
            ({"QWEN_CODE": "1"}, "Qwen-Coder <noreply@alibabacloud.com>"),
            ({"GEMINI_CLI": "1"}, "Gemini <noreply@developers.google.com>"),
            ({"IFLOW_CLI": "1"}, "iFlow <noreply@iflow.cn>"),
            ({"CODEX_MANAGED_BY_NPM": "1"}, "Codex <noreply@openai.com>"),
            ({"CODEX_MANAGED_BY_BUN": "1"}, "Codex <noreply@openai.com>"),
            ({"OPENCODE": "1"}, "OpenCode <noreply@opencode.ai>"),
            ({"QODER_CLI": "1"}, "Qoder CLI <noreply@qoder.com>"),
            ({"VSCODE_BRAND": "Qoder"}, QODER),
            ({"__CFBundleIdentifier": "com.qoder.ide"}, QODER),
            ({"__CFBundleIdentifier": "dev.kiro.desktop"}, "Kiro <noreply@kiro.dev>"),
            ({"CURSOR_TRACE_ID": "abc-123"}, CURSOR),
        ],
    )
    def test_single_signal(self, env, expected):
        assert get_co_developed_by(env) == expected

    @pytest.mark.parametrize("key", ["VSCODE_GIT_ASKPASS_MAIN", "BROWSER"])
    def test_cursor_server_paths(self, key):
        assert get_co_developed_by({key: "/home/user/.cursor-server/bin/helper.sh"}) == CURSOR

    @pytest.mark.parametrize("key", ["VSCODE_GIT_ASKPASS_MAIN", "BROWSER"])
    def test_qoder_server_paths(self, key):
        assert get_co_developed_by({key: "/home/user/.qoder-server/bin/helper.sh"}) == QODER

    def test_cli_wins_over_ide(self):
        env = {"CURSOR_TRACE_ID": "abc", "VSCODE_BRAND": "Qoder", "CLAUDECODE": "1"}
        assert get_co_developed_by(env) == CLAUDE

    def test_iflow_wins_over_kiro(self):
        env = {"__CFBundleIdentifier": "dev.kiro.desktop", "IFLOW_CLI": "1"}
        assert get_co_developed_by(env) == "iFlow <noreply@iflow.cn>"

    def test_qwen_wins_over_lower_priority(self):
        env = {"QWEN_CODE": "1", "GEMINI_CLI": "1", "CURSOR_TRACE_ID": "x"}
        assert get_co_developed_by(env) == "Qwen-Coder <noreply@alibabacloud.com>"

    def test_no_signal(self):
        assert get_co_developed_by({"PATH": "/usr/bin"}) == ""

    def test_wrong_values(self):
        env = {"CLAUDECODE": "0", "QWEN_CODE": "true", "VSCODE_BRAND": "Code", "CURSOR_TRACE_ID": "false"}
        assert get_co_developed_by(env) == ""

    def test_empty_values(self):
        assert get_co_developed_by({"CLAUDECODE": "", "CURSOR_TRACE_ID": ""}) == ""

    def test_custom_rules(self):
        bot = Agent("Bot", "bot@example.com")
        rules = [EnvRule("BOT", Truthy(), bot)]
        assert get_co_developed_by({"BOT": "yes"}, rules) == "Bot <bot@example.com>"
        assert detect_agent({"CLAUDECODE": "1"}, rules) is None


def test_clear_agent_env():
    env = {"CLAUDECODE": "1", "BROWSER": "/x/.cursor-server/y", "HOME": "/home/u"}
    clear_agent_env(env)
    assert env == {"HOME": "/home/u"}


def test_cli_rules_precede_ide_rules():
    keys = [rule.key for rule in AGENT_RULES]
    assert keys.index("GEMINI_CLI") < keys.index("CURSOR_TRACE_ID")
    assert keys.index("CLAUDECODE") == 0
