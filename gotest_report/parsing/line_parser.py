"""Test runner output parser.

Turns the interleaved output of a test run into a :class:`Report`.  Each
line is classified, first match wins, as one of:

1. a package-result line (``ok  pkg 0.01s``) which closes every package
   accumulated so far;
2. a status line (``--- FAIL: TestName (0.01s)``) which resolves a known
   test and makes it the active test;
3. a benchmark result line;
4. a single-line JSON output record ``{"Suite": ..., "Test": ..., "Msg": ...}``
   which creates tests and collects their output;
5. free text, which is attributed to the active test when that test
   failed or was skipped, and dropped otherwise.

Bare ``PASS``/``FAIL`` summary lines get no special treatment and fall
through to rule 5.  Malformed lines never raise.  Tests whose package is
never closed by a result line are discarded at end of stream.
"""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Iterable
from datetime import timedelta
from typing import IO, Any, Union

from gotest_report.model.report import Benchmark, Package, Report, Result, Test
from gotest_report.parsing.benchmarks import match_benchmark
from gotest_report.parsing.config import ParserConfig
from gotest_report.parsing.durations import parse_seconds
from gotest_report.parsing.patterns import INDENT_RE, RESULT_RE, STATUS_RE, base_name

logger = logging.getLogger(__name__)

# Member names of a JSON output record.
RECORD_FIELDS = ("Suite", "Test", "Msg")

Stream = Union[str, bytes, IO[str], IO[bytes], Iterable[str], Iterable[bytes]]


def _record_field(entry: dict[str, Any], key: str) -> Any:
    """Look up *key* exactly, then case-insensitively."""
    if key in entry:
        return entry[key]
    folded = key.lower()
    for name, value in entry.items():
        if name.lower() == folded:
            return value
    return None


def decode_record(line: str) -> tuple[str, str, str] | None:
    """Decode a JSON output record into ``(suite, test, msg)``.

    Absent or null members read as empty strings.  Returns ``None`` when
    the line is not a JSON object or a member is not a string.
    """
    if not line.lstrip().startswith("{"):
        return None
    try:
        # Integer members are never used; reading them as floats avoids the
        # interpreter's limit on int string length.
        entry = json.loads(line, parse_int=float)
    except (ValueError, RecursionError):
        return None
    if not isinstance(entry, dict):
        return None

    values: list[str] = []
    for key in RECORD_FIELDS:
        value = _record_field(entry, key)
        if value is None:
            value = ""
        elif not isinstance(value, str):
            return None
        values.append(value)
    suite, test, msg = values
    return suite, test, msg


class LineParser:
    """Accumulates the state of one parse.

    ``suites`` maps package name to an insertion-ordered mapping of test
    name to :class:`Test`.  It holds only the packages read since the last
    package-result line.  ``current`` is the test most recently resolved by
    a status line; free text following it lands in its failure or skip
    messages.
    """

    def __init__(
        self, package_name: str = "", config: ParserConfig | None = None,
    ) -> None:
        self.package_name = package_name
        self.config = config if config is not None else ParserConfig()
        self.report = Report()
        self.suites: dict[str, dict[str, Test]] = {}
        self.current: Test | None = None
        self.benchmarks: list[Benchmark] = []

    def feed(self, line: str) -> None:
        """Classify one line (without its newline) and update the state."""
        m = RESULT_RE.match(line)
        if m is not None:
            _status, pkg_name, _seconds, _build_failed, coverage = m.groups()
            self._flush(pkg_name, coverage)
            return

        m = STATUS_RE.search(line)
        if m is not None:
            self._resolve_status(line, m.group(1), m.group(2), m.group(3))
            return

        if self.config.collect_benchmarks:
            bench = match_benchmark(line)
            if bench is not None:
                self.benchmarks.append(bench)
                return

        record = decode_record(line)
        if record is not None:
            self._add_output(*record)
            return

        self._add_text(line)

    def finish(self) -> Report:
        """Return the report; packages left open are dropped or recovered."""
        if self.suites or self.benchmarks:
            if self.config.recover_unclosed_packages:
                logger.debug(
                    "recovering %d unclosed package(s) at end of stream",
                    len(self.suites),
                )
                self._flush(self.package_name, None, recovering=True)
            else:
                logger.debug(
                    "discarding %d unclosed package(s) and %d benchmark(s)",
                    len(self.suites), len(self.benchmarks),
                )
                self.suites = {}
                self.benchmarks = []
        return self.report

    def _flush(
        self, pkg_name: str, coverage: str | None, recovering: bool = False,
    ) -> None:
        flushed: list[Package] = []
        for suite, tests in self.suites.items():
            if recovering and not suite:
                suite = self.package_name
            duration = sum((t.duration for t in tests.values()), timedelta(0))
            flushed.append(Package(
                name=suite,
                duration=duration,
                tests=list(tests.values()),
            ))

        if self.benchmarks:
            target = next((p for p in flushed if p.name == pkg_name), None)
            if target is None:
                target = Package(name=pkg_name)
                flushed.append(target)
            target.benchmarks.extend(self.benchmarks)
            self.benchmarks = []

        if coverage and self.config.apply_result_line_summary:
            for pkg in flushed:
                if pkg.name == pkg_name:
                    pkg.coverage_pct = coverage

        logger.debug(
            "package result %r closed %d package(s)", pkg_name, len(flushed),
        )
        self.report.packages.extend(flushed)
        self.suites = {}

    def _find_test(self, name: str) -> Test | None:
        # First suite in insertion order wins when names collide.
        for tests in self.suites.values():
            test = tests.get(name)
            if test is not None:
                return test
        return None

    def _resolve_status(
        self, line: str, status: str, name: str, seconds: str,
    ) -> None:
        test = self._find_test(base_name(name))
        if test is None:
            self.current = None
            return

        test.result = Result[status]
        test.duration = parse_seconds(seconds)
        indent = INDENT_RE.match(line)
        test.subtest_indent = indent.group(1) if indent else ""
        self.current = test

    def _add_output(self, suite: str, name: str, msg: str) -> None:
        tests = self.suites.setdefault(suite, {})
        test = tests.get(name)
        if test is None:
            test = Test(name=name)
            tests[name] = test
        test.output.append(msg)

    def _add_text(self, line: str) -> None:
        cur = self.current
        if cur is None:
            return
        if cur.result is Result.FAIL:
            cur.failure.append(line)
        elif cur.result is Result.SKIP:
            cur.skip_msg.append(line)


def _decode_line(raw: str | bytes) -> str:
    """Decode *raw* and drop its trailing ``\\n`` or ``\\r\\n``."""
    line = raw.decode("utf-8", errors="replace") if isinstance(raw, bytes) else raw
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def parse(
    stream: Stream,
    package_name: str = "",
    config: ParserConfig | None = None,
) -> Report:
    """Parse test runner output read line by line from *stream*.

    Args:
        stream: A text or binary file object, any iterable of lines, or the
            whole output as one ``str`` or ``bytes`` value.
        package_name: Fallback package name.  Only used when the config
            enables ``recover_unclosed_packages``.
        config: Parser switches; defaults apply when omitted.

    Returns:
        The :class:`Report` of every package closed by a result line.

    Raises:
        OSError: If reading from *stream* fails.  No partial report is
            returned in that case.
    """
    if isinstance(stream, str):
        stream = io.StringIO(stream)
    elif isinstance(stream, bytes):
        stream = io.BytesIO(stream)

    parser = LineParser(package_name, config)
    for raw in stream:
        parser.feed(_decode_line(raw))
    return parser.finish()


def parse_lines(
    lines: list[str] | str,
    package_name: str = "",
    config: ParserConfig | None = None,
) -> Report:
    """Parse test runner output already held in memory.

    Args:
        lines: List of output lines, or a single string split on ``\\n``
            only, so other Unicode line breaks stay inside their line.
        package_name: Fallback package name, as for :func:`parse`.
        config: Parser switches; defaults apply when omitted.
    """
    if isinstance(lines, str):
        return parse(io.StringIO(lines), package_name, config)
    return parse(lines, package_name, config)
