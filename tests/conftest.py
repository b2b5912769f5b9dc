from __future__ import annotations

import copy
import json
from dataclasses import dataclass
from typing import Any, List, Optional

import pytest

from audit_crystal.schemas import CSRDReport


SAMPLE_REPORT = {
    "extraction": {
        "companyName": "Nordwind Energie AG",
        "reportType": "Sustainability Statement 2024",
        "doubleMaterialityIndicators": ["Climate change mitigation", "Own workforce"],
    },
    "gapAnalysis": {
        "mandatoryDisclosures": [
            {"item": "A", "status": "Met"},
            {"item": "B", "status": "Missing", "notes": "No IRO-1 process described"},
        ],
        "missingKeySections": ["ESRS 2 GOV-1"],
    },
    "scoring": {
        "readinessScore": "Partially Ready",
        "scoreColor": "#f59e0b",
        "scoreReasoning": "GRI references exist but no formal double materiality assessment.",
        "checklist": [
            {"criterion": "Double materiality documented", "met": False},
            {"criterion": "General disclosures present", "met": True},
        ],
    },
    "summary": {
        "executiveSummary": "The entity reports on sustainability but is not yet ESRS aligned.",
        "roadmap": [
            {"priority": "High", "action": "Run a double materiality assessment", "deadline": "Q2 2025"},
            {"priority": "Low", "action": "Add ESRS index"},
        ],
    },
}


@pytest.fixture
def report_dict() -> dict:
    return copy.deepcopy(SAMPLE_REPORT)


@pytest.fixture
def report(report_dict) -> CSRDReport:
    return CSRDReport.model_validate(report_dict)


# -----------------------------
# Test doubles
# -----------------------------
@dataclass
class FakeResponse:
    content: Any


class FakeLLM:
    def __init__(self, content: Any = "", error: Optional[Exception] = None):
        self._content = content
        self._error = error
        self.calls: List[list] = []

    def invoke(self, messages: list) -> FakeResponse:
        self.calls.append(messages)
        if self._error is not None:
            raise self._error
        return FakeResponse(content=self._content)


@pytest.fixture
def fake_llm_factory():
    def make(content: Any = "", error: Optional[Exception] = None) -> FakeLLM:
        return FakeLLM(content=content, error=error)
    return make


@pytest.fixture
def report_json(report_dict) -> str:
    return json.dumps(report_dict)


@pytest.fixture
def no_api_key(monkeypatch):
    for name in ("GEMINI_API_KEY", "GOOGLE_API_KEY", "API_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("audit_crystal.llm_provider._read_secrets", lambda: {})
