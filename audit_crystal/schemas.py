from __future__ import annotations
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


DisclosureState = Literal["Met", "Missing"]
ReadinessScore = Literal["Ready", "Partially Ready", "Not Ready"]
Priority = Literal["High", "Medium", "Low"]


class ContractModel(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -------- Input --------
class FileData(ContractModel):
    name: str
    mime_type: str
    base64: str


class InputPayload(ContractModel):
    text: Optional[str] = None
    file: Optional[FileData] = None

    def is_empty(self) -> bool:
        return not self.text and self.file is None


# -------- Schema 1: Extraction --------
class ExtractionData(ContractModel):
    company_name: str
    report_type: str
    double_materiality_indicators: List[str]


# -------- Schema 2: Gap Analysis --------
class DisclosureStatus(ContractModel):
    item: str
    status: DisclosureState
    notes: Optional[str] = None


class GapAnalysisData(ContractModel):
    mandatory_disclosures: List[DisclosureStatus]
    missing_key_sections: List[str]


# -------- Schema 3: Scoring Rubric --------
class ChecklistItem(ContractModel):
    criterion: str
    met: bool


class ScoringData(ContractModel):
    readiness_score: ReadinessScore
    score_color: str
    score_reasoning: str
    checklist: List[ChecklistItem]


# -------- Schema 4: Summary Report --------
class RoadmapItem(ContractModel):
    priority: Priority
    action: str
    deadline: Optional[str] = None


class SummaryData(ContractModel):
    executive_summary: str
    roadmap: List[RoadmapItem]


class CSRDReport(ContractModel):
    """Full readiness assessment. All four sections are mandatory."""

    extraction: ExtractionData
    gap_analysis: GapAnalysisData
    scoring: ScoringData
    summary: SummaryData


def _string_array() -> dict:
    return {"type": "array", "items": {"type": "string"}}


# Declared to Gemini as response_schema; must stay in step with CSRDReport.
REPORT_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "extraction": {
            "type": "object",
            "description": "Schema 1: PDF Extraction Data",
            "properties": {
                "companyName": {"type": "string", "description": "Name of the entity"},
                "reportType": {"type": "string", "description": "Type of document"},
                "doubleMaterialityIndicators": {
                    **_string_array(),
                    "description": "Topics identified as material",
                },
            },
            "required": ["companyName", "reportType", "doubleMaterialityIndicators"],
        },
        "gapAnalysis": {
            "type": "object",
            "description": "Schema 2: Gap Analysis",
            "properties": {
                "mandatoryDisclosures": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "item": {"type": "string"},
                            "status": {"type": "string", "enum": ["Met", "Missing"]},
                            "notes": {"type": "string"},
                        },
                        "required": ["item", "status"],
                    },
                },
                "missingKeySections": _string_array(),
            },
            "required": ["mandatoryDisclosures", "missingKeySections"],
        },
        "scoring": {
            "type": "object",
            "description": "Schema 3: Scoring Rubric",
            "properties": {
                "readinessScore": {
                    "type": "string",
                    "enum": ["Ready", "Partially Ready", "Not Ready"],
                },
                "scoreColor": {"type": "string", "description": "Hex color (e.g., #10b981)"},
                "scoreReasoning": {"type": "string"},
                "checklist": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "criterion": {"type": "string"},
                            "met": {"type": "boolean"},
                        },
                        "required": ["criterion", "met"],
                    },
                },
            },
            "required": ["readinessScore", "scoreColor", "scoreReasoning", "checklist"],
        },
        "summary": {
            "type": "object",
            "description": "Schema 4: Summary Report",
            "properties": {
                "executiveSummary": {"type": "string"},
                "roadmap": {
                    "type": "array",
                    "items": {
                        "type": "object",
                        "properties": {
                            "priority": {"type": "string", "enum": ["High", "Medium", "Low"]},
                            "action": {"type": "string"},
                            "deadline": {"type": "string"},
                        },
                        "required": ["priority", "action"],
                    },
                },
            },
            "required": ["executiveSummary", "roadmap"],
        },
    },
    "required": ["extraction", "gapAnalysis", "scoring", "summary"],
}
