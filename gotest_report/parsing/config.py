"""Opt-in parser switches.

With no file, or with every switch left at its default, the parser keeps
the plain line-classification behavior.  Each switch only widens what
ends up in the report:

``apply_result_line_summary``
    copy the coverage figure of a package-result line onto the package of
    the same name.
``recover_unclosed_packages``
    emit suites still open at end of stream under their own name, or the
    fallback package name when they have none.
``collect_benchmarks``
    recognize benchmark result lines; when off they are read as free text.

The file is YAML, so a JSON object works as well.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "apply_result_line_summary": False,
    "recover_unclosed_packages": False,
    "collect_benchmarks": True,
}


class ParserConfig:
    """Switch values for one parse, optionally read from *path*.

    A missing, unreadable, or non-mapping file leaves every switch at its
    default; the parser never fails because of its configuration.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._switches: dict[str, Any] = dict(DEFAULT_CONFIG)
        if self.path is not None and self.path.exists():
            self._switches.update(_read_switches(self.path))

    @property
    def config(self) -> dict[str, Any]:
        """Copy of the current switch values."""
        return dict(self._switches)

    def _flag(self, name: str) -> bool:
        return bool(self._switches.get(name, DEFAULT_CONFIG[name]))

    @property
    def apply_result_line_summary(self) -> bool:
        return self._flag("apply_result_line_summary")

    @property
    def recover_unclosed_packages(self) -> bool:
        return self._flag("recover_unclosed_packages")

    @property
    def collect_benchmarks(self) -> bool:
        return self._flag("collect_benchmarks")

    def set_config(
        self,
        apply_result_line_summary: bool | None = None,
        recover_unclosed_packages: bool | None = None,
        collect_benchmarks: bool | None = None,
    ) -> None:
        """Override switches in memory; ``None`` leaves a switch unchanged."""
        updates = {
            "apply_result_line_summary": apply_result_line_summary,
            "recover_unclosed_packages": recover_unclosed_packages,
            "collect_benchmarks": collect_benchmarks,
        }
        for name, value in updates.items():
            if value is not None:
                self._switches[name] = value


def _read_switches(path: Path) -> dict[str, Any]:
    """Known switches found in *path*; anything else in the file is ignored."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError):
        return {}
    if not isinstance(data, dict):
        return {}
    return {name: data[name] for name in DEFAULT_CONFIG if name in data}
