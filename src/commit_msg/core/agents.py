"""AI coding agent detection from process environment signals.

Each agent is recognised by one or more environment variables that its CLI or
IDE exports into child processes (and therefore into ``git commit``). The rule
table is ordered: CLI tools come first because they are frequently launched
from inside an IDE terminal, which would otherwise be reported instead.
"""

import logging
from collections.abc import Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from typing import Optional, Union

logger = logging.getLogger(__name__)

# Values that disable a wildcard match even though the variable is present
_FALSY_VALUES = frozenset({"", "0", "false", "no"})


@dataclass(frozen=True)
class ExactValue:
    """Matches when the variable equals ``value`` exactly."""

    value: str

    def matches(self, actual: str) -> bool:
        return actual == self.value


@dataclass(frozen=True)
class Truthy:
    """Matches when the variable is present with a meaningful value."""

    def matches(self, actual: str) -> bool:
        return actual not in _FALSY_VALUES


@dataclass(frozen=True)
class Substring:
    """Matches when the variable contains ``needle`` anywhere."""

    needle: str

    def matches(self, actual: str) -> bool:
        return self.needle in actual


Pattern = Union[ExactValue, Truthy, Substring]


@dataclass(frozen=True)
class Agent:
    """An AI coding agent as credited in a Co-developed-by trailer."""

    name: str
    email: str

    @property
    def identity(self) -> str:
        return f"{self.name} <{self.email}>"


@dataclass(frozen=True)
class EnvRule:
    """Environment signal that identifies an agent."""

    key: str
    pattern: Pattern
    agent: Agent

    def matches(self, env: Mapping[str, str]) -> bool:
        actual = env.get(self.key)
        if actual is None:
            return False
        return self.pattern.matches(actual)


CLAUDE = Agent("Claude", "noreply@anthropic.com")
IFLOW = Agent("iFlow", "noreply@iflow.cn")
QWEN_CODER = Agent("Qwen-Coder", "noreply@alibabacloud.com")
GEMINI = Agent("Gemini", "noreply@developers.google.com")
CODEX = Agent("Codex", "noreply@openai.com")
OPENCODE = Agent("OpenCode", "noreply@opencode.ai")
QODER_CLI = Agent("Qoder CLI", "noreply@qoder.com")
CURSOR = Agent("Cursor", "noreply@cursor.com")
KIRO = Agent("Kiro", "noreply@kiro.dev")
QODER = Agent("Qoder", "noreply@qoder.com")

AGENT_RULES: tuple[EnvRule, ...] = (
    # CLI tools
    EnvRule("CLAUDECODE", ExactValue("1"), CLAUDE),
    EnvRule("IFLOW_CLI", ExactValue("1"), IFLOW),
    EnvRule("QWEN_CODE", ExactValue("1"), QWEN_CODER),
    EnvRule("GEMINI_CLI", ExactValue("1"), GEMINI),
    EnvRule("CODEX_MANAGED_BY_NPM", ExactValue("1"), CODEX),
    EnvRule("CODEX_MANAGED_BY_BUN", ExactValue("1"), CODEX),
    EnvRule("OPENCODE", ExactValue("1"), OPENCODE),
    EnvRule("QODER_CLI", ExactValue("1"), QODER_CLI),
    # IDEs
    EnvRule("CURSOR_TRACE_ID", Truthy(), CURSOR),
    EnvRule("VSCODE_GIT_ASKPASS_MAIN", Substring("/.cursor-server/"), CURSOR),
    EnvRule("BROWSER", Substring("/.cursor-server/"), CURSOR),
    EnvRule("__CFBundleIdentifier", ExactValue("dev.kiro.desktop"), KIRO),
    EnvRule("VSCODE_BRAND", ExactValue("Qoder"), QODER),
    # Unstable bundle id, used until Qoder exports a dedicated variable
    EnvRule("__CFBundleIdentifier", ExactValue("com.qoder.ide"), QODER),
    EnvRule("VSCODE_GIT_ASKPASS_MAIN", Substring("/.qoder-server/"), QODER),
    EnvRule("BROWSER", Substring("/.qoder-server/"), QODER),
)


def detect_agent(
    env: Mapping[str, str], rules: Sequence[EnvRule] = AGENT_RULES
) -> Optional[Agent]:
    """Return the first agent whose rule matches ``env``, or None."""
    for rule in rules:
        if rule.matches(env):
            logger.debug(f"Agent {rule.agent.name} detected via {rule.key}")
            return rule.agent
    return None


def get_co_developed_by(env: Mapping[str, str], rules: Sequence[EnvRule] = AGENT_RULES) -> str:
    """Resolve the Co-developed-by identity for an environment snapshot.

    Args:
        env: Immutable snapshot of the process environment.
        rules: Ordered rule table, first match wins.

    Returns:
        ``"Name <email>"`` of the detected agent, or an empty string when no
        rule matches (no Co-developed-by trailer should be added).
    """
    agent = detect_agent(env, rules)
    return agent.identity if agent else ""


def clear_agent_env(env: MutableMapping[str, str], rules: Sequence[EnvRule] = AGENT_RULES) -> None:
    """Remove every variable consulted by ``rules`` from ``env``."""
    for rule in rules:
        env.pop(rule.key, None)
