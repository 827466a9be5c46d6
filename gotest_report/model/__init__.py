"""Report data model: packages, tests, and benchmarks."""

from gotest_report.model.report import Benchmark, Package, Report, Result, Test, failures

__all__ = [
    "Benchmark",
    "Package",
    "Report",
    "Result",
    "Test",
    "failures",
]
