"""Build normalized test reports from test runner output."""

from gotest_report.model.report import Benchmark, Package, Report, Result, Test, failures
from gotest_report.parsing.benchmarks import match_benchmark
from gotest_report.parsing.config import ParserConfig
from gotest_report.parsing.durations import parse_nanoseconds, parse_seconds
from gotest_report.parsing.line_parser import LineParser, parse, parse_lines

__all__ = [
    "Benchmark",
    "LineParser",
    "Package",
    "ParserConfig",
    "Report",
    "Result",
    "Test",
    "failures",
    "match_benchmark",
    "parse",
    "parse_lines",
    "parse_nanoseconds",
    "parse_seconds",
]
