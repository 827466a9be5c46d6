"""Benchmark result line matching."""

from __future__ import annotations

from gotest_report.model.report import Benchmark
from gotest_report.parsing.durations import parse_nanoseconds
from gotest_report.parsing.patterns import BENCHMARK_RE


def match_benchmark(line: str) -> Benchmark | None:
    """Build a :class:`Benchmark` from a benchmark result line.

    Example::

        BenchmarkParse-8   	  500000	      2873 ns/op	     512 B/op	       7 allocs/op

    The ``-N`` core-count suffix is not part of the name.  B/op and
    allocs/op are ``0`` when the line does not report them.

    Returns:
        The benchmark, or ``None`` if *line* is not a benchmark line.
    """
    m = BENCHMARK_RE.match(line)
    if m is None:
        return None
    name, _iterations, ns_per_op, bytes_per_op, allocs_per_op = m.groups()
    return Benchmark(
        name=name,
        duration_ns=parse_nanoseconds(ns_per_op),
        bytes=int(bytes_per_op) if bytes_per_op else 0,
        allocs=int(allocs_per_op) if allocs_per_op else 0,
    )
