"""End-to-end tests over realistic test runner output.

Feeds a multi-package run through the public API and checks the
resulting report.
"""

from __future__ import annotations

import io
import tempfile
from datetime import timedelta
from pathlib import Path

import gotest_report
from gotest_report import ParserConfig, Result, parse


RUN_OUTPUT = """\
=== RUN   TestLogin
{"Suite":"example.com/shop/auth","Test":"TestLogin","Msg":"=== RUN   TestLogin\\n"}
{"Suite":"example.com/shop/auth","Test":"TestLogin","Msg":"    auth_test.go:12: token issued\\n"}
{"Suite":"example.com/shop/auth","Test":"TestLogout","Msg":"=== RUN   TestLogout\\n"}
{"Suite":"example.com/shop/auth","Test":"TestExpired","Msg":"=== RUN   TestExpired\\n"}
--- PASS: TestLogin (0.12s)
--- FAIL: TestLogout (0.05s)
    auth_test.go:40: session still active
    auth_test.go:41: expected 401, got 200
--- SKIP: TestExpired (0.00s)
    auth_test.go:55: clock not injectable
FAIL
FAIL\texample.com/shop/auth\t0.170s
{"Suite":"example.com/shop/cart","Test":"TestTotals","Msg":"=== RUN   TestTotals\\n"}
{"Suite":"example.com/shop/cart","Test":"empty","Msg":"=== RUN   TestTotals/empty\\n"}
{"Suite":"example.com/shop/cart","Test":"discount","Msg":"=== RUN   TestTotals/discount\\n"}
--- FAIL: TestTotals (0.30s)
    --- PASS: TestTotals/empty (0.10s)
    --- FAIL: TestTotals/discount (0.20s)
        cart_test.go:77: total = 90, want 85
BenchmarkTotals-8   \t 2000000\t       612000 ns/op\t     128 B/op\t       3 allocs/op
FAIL
FAIL\texample.com/shop/cart\t1.402s\tcoverage: 71.3% of statements
{"Suite":"example.com/shop/orders","Test":"TestPlace","Msg":"=== RUN   TestPlace\\n"}
--- FAIL: TestPlace (2.00s)
    orders_test.go:9: interrupted
"""


def _by_name(items):
    return {item.name: item for item in items}


def _default_report():
    return parse(io.StringIO(RUN_OUTPUT))


class TestDefaultParse:
    """Full run with default configuration."""

    def test_closed_packages_only(self):
        """Only packages closed by a result line are reported."""
        report = _default_report()
        assert [p.name for p in report.packages] == [
            "example.com/shop/auth",
            "example.com/shop/cart",
        ]

    def test_auth_package(self):
        """Results, failure detail, and skip messages land on the right tests."""
        report = _default_report()
        auth = report.packages[0]
        tests = _by_name(auth.tests)
        assert [t.name for t in auth.tests] == ["TestLogin", "TestLogout", "TestExpired"]

        assert tests["TestLogin"].result is Result.PASS
        assert tests["TestLogin"].output == [
            "=== RUN   TestLogin\n",
            "    auth_test.go:12: token issued\n",
        ]
        assert tests["TestLogout"].result is Result.FAIL
        assert tests["TestLogout"].failure == [
            "    auth_test.go:40: session still active",
            "    auth_test.go:41: expected 401, got 200",
        ]
        assert tests["TestExpired"].result is Result.SKIP
        # The bare FAIL summary follows the skip and is kept as text.
        assert tests["TestExpired"].skip_msg == [
            "    auth_test.go:55: clock not injectable",
            "FAIL",
        ]
        assert auth.duration == timedelta(milliseconds=170)

    def test_cart_package(self):
        """Subtests resolve by their last name element."""
        report = _default_report()
        cart = report.packages[1]
        tests = _by_name(cart.tests)
        assert tests["TestTotals"].result is Result.FAIL
        assert tests["TestTotals"].subtest_indent == ""
        assert tests["empty"].result is Result.PASS
        assert tests["empty"].subtest_indent == "    "
        assert tests["discount"].failure == [
            "        cart_test.go:77: total = 90, want 85",
            "FAIL",
        ]
        assert cart.duration == timedelta(milliseconds=600)
        assert cart.coverage_pct == ""

    def test_cart_benchmark(self):
        """The benchmark joins the package closed after it."""
        report = _default_report()
        cart = report.packages[1]
        assert len(cart.benchmarks) == 1
        bench = cart.benchmarks[0]
        assert bench.name == "BenchmarkTotals"
        assert bench.duration_ns == 612000
        assert bench.duration == timedelta(microseconds=612)
        assert bench.bytes == 128
        assert bench.allocs == 3

    def test_failures(self):
        """TestLogout, TestTotals, and discount failed."""
        report = _default_report()
        assert report.failures() == 3
        assert gotest_report.failures(report) == 3

    def test_to_dict(self):
        """The plain-data view mirrors the report."""
        report = _default_report()
        d = report.to_dict()
        assert d["failures"] == 3
        assert [p["name"] for p in d["packages"]] == [
            "example.com/shop/auth",
            "example.com/shop/cart",
        ]


class TestConfiguredParse:
    """Full run with a config file enabling every switch."""

    def test_all_switches(self):
        """Coverage is applied and the interrupted package is recovered."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "parser.yaml"
            path.write_text(
                "apply_result_line_summary: true\n"
                "recover_unclosed_packages: true\n"
            )
            cfg = ParserConfig(path)
            report = parse(
                io.BytesIO(RUN_OUTPUT.encode()),
                package_name="example.com/shop",
                config=cfg,
            )

        pkgs = _by_name(report.packages)
        assert list(pkgs) == [
            "example.com/shop/auth",
            "example.com/shop/cart",
            "example.com/shop/orders",
        ]
        assert pkgs["example.com/shop/cart"].coverage_pct == "71.3"
        orders = pkgs["example.com/shop/orders"]
        assert orders.tests[0].result is Result.FAIL
        assert orders.tests[0].failure == ["    orders_test.go:9: interrupted"]
        assert report.failures() == 4
