"""
Tests for the batch pipeline: per-artifact isolation and aggregation.
"""

import logging
from concurrent.futures import ThreadPoolExecutor

from evmlint.artifact import ContractArtifact
from evmlint.events import EventKind
from evmlint.pipeline import AnalysisUnit, analyze_artifact, analyze_batch

from conftest import SOURCE_PATH, scanner_result


def test_analyze_artifact(build):
    artifact = ContractArtifact.from_build_json(build)
    reports = analyze_artifact(artifact, [scanner_result(locations=("4:1:0", "2:1:0"))])
    assert len(reports) == 1
    (report,) = reports
    assert report.file_path == SOURCE_PATH
    # 2:1:0 sits on the dynamic array and is suppressed
    assert len(report.messages) == 1
    assert report.messages[0].start.line == 3
    assert report.error_count == 1


def test_bad_artifact_does_not_abort_batch(build, caplog):
    broken = dict(build, contractName="Broken", deployedBytecode="0xzz")
    units = [
        AnalysisUnit(broken, [scanner_result()]),
        AnalysisUnit(build, [scanner_result()]),
    ]
    with caplog.at_level(logging.WARNING, logger="evmlint.pipeline"):
        batch = analyze_batch(units)

    assert [f.contract_name for f in batch.errors] == ["Broken"]
    assert len(batch.reports) == 1
    assert batch.reports[0].error_count == 1
    assert any("Broken" in r.getMessage() for r in caplog.records)


def test_missing_contract_name_is_a_failure():
    batch = analyze_batch([AnalysisUnit({"bytecode": "0x00"}, [])])
    assert len(batch.errors) == 1
    assert batch.reports == []


def test_reports_are_grouped_by_basename(build):
    other = dict(scanner_result(severity="Medium"), sourceList=["/elsewhere/Store.sol"])
    units = [
        AnalysisUnit(build, [scanner_result()]),
        AnalysisUnit(build, [other]),
    ]
    batch = analyze_batch(units)
    assert len(batch.reports) == 1
    group = batch.reports[0]
    assert group.file_path == SOURCE_PATH
    assert (group.error_count, group.warning_count) == (1, 1)
    assert batch.error_count == 1


def test_executor_preserves_order(build):
    units = [
        AnalysisUnit(dict(build, sourcePath=f"/p{i}/C{i}.sol"), [dict(scanner_result(), sourceList=[f"/p{i}/C{i}.sol"])])
        for i in range(5)
    ]
    with ThreadPoolExecutor(max_workers=3) as pool:
        batch = analyze_batch(units, executor=pool)
    assert [r.file_path for r in batch.reports] == [f"/p{i}/C{i}.sol" for i in range(5)]


def test_events_are_forwarded(build):
    events = []
    build["bytecode"] = ""
    analyze_batch([AnalysisUnit(build, [scanner_result(locations=("2:1:0",))])], on_event=events.append)
    kinds = [e.kind for e in events]
    assert kinds == [EventKind.EMPTY_FIELD_DROPPED, EventKind.ISSUE_SUPPRESSED]


def test_strict_mismatch_fails_only_its_artifact(build, caplog):
    short = dict(build, contractName="Short", deployedSourceMap="0:59:0")
    units = [
        AnalysisUnit(build, [scanner_result()]),
        AnalysisUnit(short, [scanner_result(locations=("4:1:0",))]),
    ]
    with caplog.at_level(logging.ERROR, logger="evmlint.pipeline"):
        batch = analyze_batch(units, strict=True)

    assert [f.contract_name for f in batch.errors] == ["Short"]
    assert "no source map entry" in batch.errors[0].reason
    (report,) = batch.reports
    assert report.messages[0].start.line == 3
    assert any(r.levelno == logging.ERROR and "Short" in r.getMessage() for r in caplog.records)


def test_lenient_mode_keeps_issue(build):
    build["deployedSourceMap"] = "0:59:0"
    batch = analyze_batch([AnalysisUnit(build, [scanner_result(locations=("4:1:0",))])])
    (report,) = batch.reports
    assert report.messages[0].start.line == -1


def test_to_dict(build):
    batch = analyze_batch([AnalysisUnit(build, [scanner_result()])])
    (out,) = batch.to_dict()
    assert out["filePath"] == SOURCE_PATH
    assert out["messages"][0]["ruleId"] == "SWC-101"
    assert out["messages"][0]["message"] == "Head message Tail message"
