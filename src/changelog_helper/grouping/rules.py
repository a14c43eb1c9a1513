"""
Rule tables driving every classification decision.

All tables are ordered tuples compiled once at import time. Where a
table pairs a pattern with an outcome, the first matching entry wins, so
the order of entries matters.
"""

from __future__ import annotations

import re
from typing import Tuple


def _compile(*patterns: str) -> Tuple[re.Pattern, ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


# ---------------------------------------------------------------------------
# Relevance filter
# ---------------------------------------------------------------------------

# Labels marking internal or process-only work.
SKIP_LABELS = frozenset(
    {
        "internal",
        "ci",
        "test",
        "tests",
        "testing",
        "infrastructure",
        "infra",
        "chore",
        "dependencies",
        "deps",
        "tooling",
        "refactor",
        "refactoring",
    }
)

SKIP_TITLE_PATTERNS = _compile(
    r"^chore(\(.*\))?:",
    r"^ci(\(.*\))?:",
    r"^test(\(.*\))?:",
    r"^tests(\(.*\))?:",
    r"^refactor(\(.*\))?:",
    r"^internal(\(.*\))?:",
    r"^infra(\(.*\))?:",
    r"^deps(\(.*\))?:",
    r"^build(\(.*\))?:",
    r"update.*dependencies",
    r"bump.*version",
    r"merge.*branch",
    r"\[skip.*changelog\]",
    r"\[internal\]",
)

# ---------------------------------------------------------------------------
# Classifier
# ---------------------------------------------------------------------------

# "fix..." either at the very start or right after a conventional prefix
# such as "docs(readme): ".
BUG_FIX_TITLE_PATTERNS = _compile(
    r"^fix",
    r"^[a-z]+(\(.*?\))?:\s*fix",
)
BUG_FIX_KEYWORDS = ("bug", "broken", "issue", "crash", "error")
BUG_FIX_LABELS = frozenset({"bug", "fix", "bugfix", "hotfix"})

FEATURE_TITLE_PATTERNS = _compile(
    r"^feat(\(.*\))?:",
    r"^add\b",
    r"^[a-z]+(\(.*?\))?:\s*add",
    r"^new\b",
)
FEATURE_KEYWORDS = ("support for", "introduce", "implement")
FEATURE_LABELS = frozenset({"feature", "enhancement", "new"})

# ---------------------------------------------------------------------------
# Title rewriter
# ---------------------------------------------------------------------------

CONVENTIONAL_PREFIX = re.compile(r"^[a-z]+(\(.*?\))?:\s*", re.IGNORECASE)

# Titles that read fine on their own and never get an explanation.
SIMPLE_PATTERNS = _compile(
    r"^fix\s+(broken\s+)?links?",
    r"^update\s+(the\s+)?readme",
    r"^fix\s+typo",
    r"^add\s+documentation",
    r"^improve\s+error\s+messages?",
)

SECURITY_PERMISSION_EXPLANATION = (
    "GitHub commands now request only the permissions they need, improving security."
)

TECHNICAL_EXPLANATIONS: Tuple[Tuple[re.Pattern, str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), explanation)
    for pattern, explanation in (
        # Security and permissions
        (r"remove.*(?:overly |too )?broad.*permission", SECURITY_PERMISSION_EXPLANATION),
        (r"restrict.*permission", "Tightened security by limiting what actions can be performed."),
        (r"(?:add|allow).*(?:to )?(?:allowed|permitted|whitelist).*pattern", "More command variations are now supported."),
        (r"add.*:.*to.*pattern", "Commands can now accept additional arguments."),
        # Configuration and setup
        (r"move.*(?:bash|script|command).*(?:to|from).*(?:script|setup|config)", "Simplified the setup process for better reliability."),
        (r"multi-?line.*bash", "Complex commands are now handled more reliably."),
        # API and integrations
        (r"\bgh\s+api\b", "Relates to GitHub integration."),
        (r"\bapi\s+(?:endpoint|call|request)", "Affects how the tool communicates with external services."),
        # Performance
        (r"reduce.*(?:memory|cpu|load|latency)", "The tool now uses fewer system resources."),
        (r"improve.*(?:perf|performance|speed)", "Operations complete faster now."),
        (r"(?:cache|caching)", "Frequently used data is now stored for faster access."),
        # Error handling
        (r"(?:handle|catch).*(?:error|exception)", "Error scenarios are now handled more gracefully."),
        (r"(?:fix|prevent).*crash", "Resolved an issue that could cause the tool to stop unexpectedly."),
        (r"(?:fix|prevent).*hang", "Resolved an issue that could cause the tool to become unresponsive."),
        # Glossary
        (r"dedupe", "Relates to removing duplicate entries."),
        (r"\bregex\b", "Relates to pattern matching functionality."),
        (r"\bwebhook", "Relates to automated notifications."),
        (r"\btoken\b", "Relates to authentication credentials."),
    )
)

# Matched as plain substrings of the lower-cased title, so "arg" also hits
# "large". Existing changelogs were produced with that behaviour.
TECHNICAL_TERMS = (
    "api",
    "cli",
    "bash",
    "shell",
    "regex",
    "webhook",
    "token",
    "endpoint",
    "config",
    "env",
    "param",
    "arg",
    "init",
    "auth",
    "permission",
    "scope",
    "stdin",
    "stdout",
    "stderr",
    "async",
    "sync",
    "callback",
    "handler",
    "dedupe",
    "cache",
    "buffer",
    "stream",
    "pipe",
    "fork",
    "spawn",
)

GENERIC_TECHNICAL_EXPLANATION = (
    "This is a technical change that improves how the tool works internally."
)
