"""Compiled matchers for the line shapes printed by the test runner.

The patterns are module constants; they hold no state and may be shared
freely between parser invocations.
"""

from __future__ import annotations

import re

# --- PASS: TestName (0.01s)
STATUS_RE = re.compile(
    r"--- (PASS|FAIL|SKIP): (.+) \((\d+\.\d+)(?: seconds|s)\)", re.ASCII,
)

# Leading whitespace of a nested status line.
INDENT_RE = re.compile(r"^([ \t]+)---", re.ASCII)

# ok  	pkg/path	0.012s	coverage: 87.5% of statements
# FAIL	pkg/path [build failed]
RESULT_RE = re.compile(
    r"^(ok|FAIL)\s+([^ ]+)\s+"
    r"(?:(\d+\.\d+)s|\(cached\)|(\[\w+ failed]))"
    r"(?:\s+coverage:\s+(\d+\.\d+)%\sof\sstatements(?:\sin\s.+)?)?$",
    re.ASCII,
)

# Groups: name, iterations, ns/op, B/op (optional), allocs/op (optional).
BENCHMARK_RE = re.compile(
    r"^(Benchmark[^ -]+)(?:-\d+\s+|\s+)(\d+)\s+(\d+|\d+\.\d+)\sns/op"
    r"(?:\s+(\d+)\sB/op)?(?:\s+(\d+)\sallocs/op)?",
    re.ASCII,
)

# Bare PASS / FAIL / SKIP printed at the end of a test binary's output.
SUMMARY_RE = re.compile(r"^(PASS|FAIL|SKIP)$")


def base_name(name: str) -> str:
    """Return the last slash-separated element of *name*.

    Trailing slashes are ignored.  An empty name yields ``"."`` and a name
    made only of slashes yields ``"/"``.
    """
    if not name:
        return "."
    stripped = name.rstrip("/")
    if not stripped:
        return "/"
    return stripped.rsplit("/", 1)[-1]
