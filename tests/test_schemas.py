from __future__ import annotations

from audit_crystal.schemas import REPORT_RESPONSE_SCHEMA, CSRDReport, InputPayload
from audit_crystal.utils import encode_file


def test_json_round_trip_is_field_for_field_equal(report):
    again = CSRDReport.model_validate_json(report.model_dump_json(by_alias=True))
    assert again == report
    assert again.model_dump() == report.model_dump()


def test_populate_by_python_name(report):
    rebuilt = CSRDReport(
        extraction=report.extraction.model_dump(),
        gap_analysis=report.gap_analysis.model_dump(),
        scoring=report.scoring.model_dump(),
        summary=report.summary.model_dump(),
    )
    assert rebuilt == report


def test_input_payload_emptiness():
    assert InputPayload().is_empty()
    assert InputPayload(text="").is_empty()
    assert not InputPayload(text=" ").is_empty()
    assert not InputPayload(file=encode_file("a.pdf", b"")).is_empty()


def test_response_schema_matches_model_sections():
    props = REPORT_RESPONSE_SCHEMA["properties"]
    assert set(REPORT_RESPONSE_SCHEMA["required"]) == {"extraction", "gapAnalysis", "scoring", "summary"}

    for section, model in CSRDReport.model_fields.items():
        wire = model.alias
        assert wire in props
        sub = model.annotation
        wire_fields = {f.alias for f in sub.model_fields.values()}
        assert set(props[wire]["properties"]) == wire_fields


def test_response_schema_enums():
    props = REPORT_RESPONSE_SCHEMA["properties"]
    assert props["scoring"]["properties"]["readinessScore"]["enum"] == ["Ready", "Partially Ready", "Not Ready"]
    assert props["gapAnalysis"]["properties"]["mandatoryDisclosures"]["items"]["properties"]["status"]["enum"] == ["Met", "Missing"]
    assert props["summary"]["properties"]["roadmap"]["items"]["properties"]["priority"]["enum"] == ["High", "Medium", "Low"]
