"""Line classification of test runner output."""

from gotest_report.parsing.benchmarks import match_benchmark
from gotest_report.parsing.config import DEFAULT_CONFIG, ParserConfig
from gotest_report.parsing.durations import parse_nanoseconds, parse_seconds
from gotest_report.parsing.line_parser import LineParser, decode_record, parse, parse_lines

__all__ = [
    "DEFAULT_CONFIG",
    "LineParser",
    "ParserConfig",
    "decode_record",
    "match_benchmark",
    "parse",
    "parse_lines",
    "parse_nanoseconds",
    "parse_seconds",
]
