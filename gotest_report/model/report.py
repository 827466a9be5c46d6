"""Report data model.

A :class:`Report` holds one :class:`Package` per package-result line seen
in the runner output.  Each package owns its :class:`Test` and
:class:`Benchmark` entries by value.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

_MILLISECOND = timedelta(milliseconds=1)


class Result(enum.Enum):
    """Terminal outcome of a single test."""

    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"


@dataclass
class Benchmark:
    """One benchmark result line."""

    name: str
    # per operation, whole nanoseconds
    duration_ns: int = 0
    # B/op
    bytes: int = 0
    # allocs/op
    allocs: int = 0

    @property
    def duration(self) -> timedelta:
        """Per-operation duration, truncated to microseconds."""
        return timedelta(microseconds=self.duration_ns // 1000)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "duration_ns": self.duration_ns,
            "bytes": self.bytes,
            "allocs": self.allocs,
        }


@dataclass
class Test:
    """One test case, possibly a subtest.

    ``result`` is ``Result.PASS`` until a status line says otherwise.
    ``output`` collects captured output records; ``failure`` and
    ``skip_msg`` collect free-text lines that follow a FAIL or SKIP status
    line.  ``subtest_indent`` is the whitespace that preceded ``---`` on
    the status line, one level per nesting depth.
    """

    name: str
    duration: timedelta = field(default_factory=timedelta)
    result: Result = Result.PASS
    output: list[str] = field(default_factory=list)
    failure: list[str] = field(default_factory=list)
    skip_msg: list[str] = field(default_factory=list)
    subtest_indent: str = ""

    @property
    def time(self) -> int:
        """Duration in whole milliseconds.  Deprecated, use ``duration``."""
        return self.duration // _MILLISECOND

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "result": self.result.value,
            "duration_seconds": self.duration.total_seconds(),
            "time": self.time,
            "output": list(self.output),
            "failure": list(self.failure),
            "skip_msg": list(self.skip_msg),
            "subtest_indent": self.subtest_indent,
        }


@dataclass
class Package:
    """Results of a single test binary."""

    name: str
    duration: timedelta = field(default_factory=timedelta)
    tests: list[Test] = field(default_factory=list)
    benchmarks: list[Benchmark] = field(default_factory=list)
    # Empty when not reported.
    coverage_pct: str = ""

    @property
    def time(self) -> int:
        """Duration in whole milliseconds.  Deprecated, use ``duration``."""
        return self.duration // _MILLISECOND

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "duration_seconds": self.duration.total_seconds(),
            "time": self.time,
            "coverage_pct": self.coverage_pct,
            "tests": [t.to_dict() for t in self.tests],
            "benchmarks": [b.to_dict() for b in self.benchmarks],
        }


@dataclass
class Report:
    """Collection of package results in the order they were closed."""

    packages: list[Package] = field(default_factory=list)

    def failures(self) -> int:
        """Count the failed tests across all packages."""
        return sum(
            1
            for pkg in self.packages
            for test in pkg.tests
            if test.result is Result.FAIL
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view of the report.

        Durations are expressed in seconds and results by their string
        value, so the dict can be handed to any encoder.
        """
        return {
            "packages": [p.to_dict() for p in self.packages],
            "failures": self.failures(),
        }


def failures(report: Report) -> int:
    """Count the failed tests in *report*."""
    return report.failures()
