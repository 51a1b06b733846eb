"""
Configuration file loader for ``.evmlint.yml``.

Provides defaults so the tool works without a config file, while allowing
per-project choices for message length, debug events, strict resolution
and which contracts to report on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_NAMES = (".evmlint.yml", ".evmlint.yaml")


@dataclass
class ReportConfig:
    space_limited: bool = False
    debug: bool = False
    strict: bool = False


@dataclass
class ScanConfig:
    contracts: list[str] = field(default_factory=list)


def _get(raw: dict[str, Any], key: str, default: Any) -> Any:
    """Look up *key* in kebab-case first, then snake_case."""
    return raw.get(key.replace("_", "-"), raw.get(key, default))


@dataclass
class EvmLintConfig:
    """Top-level configuration for evmlint."""
    report: ReportConfig = field(default_factory=ReportConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)

    @classmethod
    def load(cls, root: Path) -> "EvmLintConfig":
        """Load config from .evmlint.yml under *root*, falling back to defaults."""
        for name in CONFIG_NAMES:
            config_path = Path(root) / name
            if config_path.exists():
                break
        else:
            return cls()

        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}
        return cls._from_dict(raw)

    @classmethod
    def _from_dict(cls, raw: dict[str, Any]) -> "EvmLintConfig":
        report_raw = raw.get("report", {}) or {}
        scan_raw = raw.get("scan", {}) or {}

        report = ReportConfig(
            space_limited=bool(_get(report_raw, "space_limited", False)),
            debug=bool(_get(report_raw, "debug", False)),
            strict=bool(_get(report_raw, "strict", False)),
        )
        scan = ScanConfig()
        if "contracts" in scan_raw:
            scan.contracts = [str(c) for c in scan_raw["contracts"] or []]
        return cls(report=report, scan=scan)

    def to_yaml(self) -> str:
        """Serialise to YAML string."""
        body = yaml.safe_dump(
            {
                "report": {
                    "space-limited": self.report.space_limited,
                    "debug": self.report.debug,
                    "strict": self.report.strict,
                },
                "scan": {"contracts": list(self.scan.contracts)},
            },
            sort_keys=False,
        )
        return "# .evmlint.yml: evmlint configuration\n\n" + body
