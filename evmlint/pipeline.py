"""
Batch pipeline: artifacts + scanner results → aggregated file reports.

Artifacts are independent.  A decode failure in one artifact, or a strict
mode source-map mismatch, is recorded in ``BatchResult.errors`` and the
rest of the batch carries on.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

from .artifact import ArtifactIndex, ContractArtifact
from .errors import ArtifactError, DecodeError, SourceMapMismatchError
from .events import EventCallback
from .issues.models import FileReport
from .issues.normalize import IssueNormalizer
from .issues.remap import remap_all
from .report.aggregate import group_reports_by_basename

logger = logging.getLogger(__name__)


@dataclass
class AnalysisUnit:
    """One artifact together with the scanner results produced for it."""
    artifact: Union[ContractArtifact, dict[str, Any]]
    results: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class ArtifactFailure:
    contract_name: str
    reason: str


@dataclass
class BatchResult:
    reports: list[FileReport] = field(default_factory=list)
    errors: list[ArtifactFailure] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(r.error_count for r in self.reports)

    def to_dict(self) -> list[dict[str, Any]]:
        return [r.to_dict() for r in self.reports]


def analyze_artifact(
    artifact: ContractArtifact,
    results: Iterable[dict[str, Any]],
    *,
    space_limited: bool = False,
    strict: bool = False,
    on_event: Optional[EventCallback] = None,
) -> list[FileReport]:
    """
    Normalize the scanner results of a single artifact.

    Raises ``DecodeError`` when the artifact's bytecode or source map
    cannot be decoded.
    """
    index = ArtifactIndex(artifact)
    normalizer = IssueNormalizer(
        index, space_limited=space_limited, strict=strict, on_event=on_event,
    )
    return normalizer.normalize_all(remap_all(results))


def _run_unit(
    unit: AnalysisUnit,
    space_limited: bool,
    strict: bool,
    on_event: Optional[EventCallback],
) -> Union[list[FileReport], ArtifactFailure]:
    raw = unit.artifact
    name = raw.contract_name if isinstance(raw, ContractArtifact) else str(raw.get("contractName", "?"))
    try:
        artifact = raw if isinstance(raw, ContractArtifact) else ContractArtifact.from_build_json(raw, on_event)
        return analyze_artifact(
            artifact, unit.results,
            space_limited=space_limited, strict=strict, on_event=on_event,
        )
    except (DecodeError, ArtifactError) as e:
        logger.warning("Skipping %s: %s", name, e)
        return ArtifactFailure(name, str(e))
    except SourceMapMismatchError as e:
        # strict mode only; the artifact's locations cannot be trusted
        logger.error("Source map of %s does not cover its bytecode: %s", name, e)
        return ArtifactFailure(name, str(e))


def analyze_batch(
    units: Iterable[AnalysisUnit],
    *,
    space_limited: bool = False,
    strict: bool = False,
    on_event: Optional[EventCallback] = None,
    executor: Optional[Executor] = None,
) -> BatchResult:
    """
    Analyze every unit and group the resulting reports by basename.

    With an *executor* the units are processed concurrently; output order
    still follows input order.
    """
    units = list(units)
    if executor is None:
        outcomes = [_run_unit(u, space_limited, strict, on_event) for u in units]
    else:
        futures = [executor.submit(_run_unit, u, space_limited, strict, on_event) for u in units]
        outcomes = [f.result() for f in futures]

    batch = BatchResult()
    collected: list[FileReport] = []
    for outcome in outcomes:
        if isinstance(outcome, ArtifactFailure):
            batch.errors.append(outcome)
        else:
            collected.extend(outcome)
    batch.reports = group_reports_by_basename(collected)
    logger.debug(
        "Analyzed %d artifact(s): %d report(s), %d failure(s)",
        len(units), len(batch.reports), len(batch.errors),
    )
    return batch
