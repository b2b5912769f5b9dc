from __future__ import annotations
import json
import re
from typing import Any, Dict, List, Tuple

from ..schemas import CSRDReport


UNKNOWN_ENTITY = "Unknown Entity"
EMPTY_MATERIALITY = "No clear material topics identified in document."
EMPTY_ROADMAP = "No roadmap actions proposed."
EMPTY_DISCLOSURES = "No mandatory disclosures assessed."
EMPTY_CHECKLIST = "No scoring criteria reported."

PRIORITY_COLORS = {"High": "red", "Medium": "orange", "Low": "blue"}
DEFAULT_SCORE_COLOR = "#64748b"
HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


# -------- Derived values --------
def disclosure_counts(report: CSRDReport) -> Tuple[int, int]:
    disclosures = report.gap_analysis.mandatory_disclosures
    met = sum(1 for d in disclosures if d.status == "Met")
    return met, len(disclosures)


def company_label(report: CSRDReport) -> str:
    return report.extraction.company_name.strip() or UNKNOWN_ENTITY


def priority_color(priority: str) -> str:
    return PRIORITY_COLORS.get(priority, "gray")


def safe_color(color: str, default: str = DEFAULT_SCORE_COLOR) -> str:
    # scoreColor comes from the model and ends up in inline HTML
    color = (color or "").strip()
    return color if HEX_COLOR.match(color) else default


# -------- Markdown views --------
def postprocess_markdown(md: str) -> str:
    s = md.replace("\r\n", "\n").replace("\r", "\n")
    # Collapse 3+ blank lines to 2
    s = re.sub(r"\n{3,}", "\n\n", s)
    # Trim trailing spaces
    s = re.sub(r"[ \t]+\n", "\n", s)
    return s.rstrip() + "\n"


def render_scorecard_md(report: CSRDReport) -> str:
    scoring = report.scoring
    lines: List[str] = [scoring.score_reasoning.strip() or "-", ""]
    if scoring.checklist:
        for c in scoring.checklist:
            mark = ":green[●]" if c.met else ":gray[○]"
            lines.append(f"- {mark} {c.criterion}")
    else:
        lines.append(f"_{EMPTY_CHECKLIST}_")
    return postprocess_markdown("\n".join(lines))


def render_summary_md(report: CSRDReport) -> str:
    return postprocess_markdown(report.summary.executive_summary.strip() or "-")


def render_materiality_md(report: CSRDReport) -> str:
    topics = report.extraction.double_materiality_indicators
    if not topics:
        return postprocess_markdown(f"_{EMPTY_MATERIALITY}_")
    return postprocess_markdown(" ".join(f"`{t}`" for t in topics))


def render_roadmap_md(report: CSRDReport) -> str:
    roadmap = report.summary.roadmap
    if not roadmap:
        return postprocess_markdown(f"_{EMPTY_ROADMAP}_")
    lines: List[str] = []
    for i, item in enumerate(roadmap, 1):
        color = priority_color(item.priority)
        lines.append(f"{i}. **{item.action}** :{color}[{item.priority}]")
        if item.deadline:
            lines.append(f"   Target: {item.deadline}")
    return postprocess_markdown("\n".join(lines))


def render_gap_analysis_md(report: CSRDReport) -> str:
    gap = report.gap_analysis
    lines: List[str] = []
    if gap.missing_key_sections:
        lines += ["**Missing Critical Sections**", ""]
        lines += [f"- :red[{sec}]" for sec in gap.missing_key_sections]
        lines.append("")
    if gap.mandatory_disclosures:
        lines += ["| Status | Disclosure | Notes |", "|---|---|---|"]
        for d in gap.mandatory_disclosures:
            status = "✅ Met" if d.status == "Met" else "❌ Missing"
            lines.append(f"| {status} | {d.item} | {d.notes or ''} |")
    else:
        lines.append(f"_{EMPTY_DISCLOSURES}_")
    return postprocess_markdown("\n".join(lines))


# -------- Raw JSON view --------
def json_sections(report: CSRDReport) -> List[Tuple[str, Dict[str, Any]]]:
    data = report.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return [
        ("Schema 1: PDF Extraction", data["extraction"]),
        ("Schema 2: Gap Analysis", data["gapAnalysis"]),
        ("Schema 3: Scoring Rubric", data["scoring"]),
        ("Schema 4: Summary Report", data["summary"]),
    ]


def report_to_json(report: CSRDReport) -> str:
    return json.dumps(report.model_dump(mode="json", by_alias=True, exclude_unset=True), indent=2, ensure_ascii=False)
