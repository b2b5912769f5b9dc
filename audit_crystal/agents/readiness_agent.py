from __future__ import annotations
import json
import logging
import re
from typing import Any, List
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from pydantic import ValidationError

from ..errors import ReportFormatError, ServiceError
from ..schemas import CSRDReport, InputPayload


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are Audit Crystal, an elite AI auditor specializing in CSRD "
    "(Corporate Sustainability Reporting Directive) and ESRS compliance."
)

# Scoring logic lives entirely in this prompt; the model applies the rubric.
ANALYSIS_PROMPT = """Analyze the provided input and generate a structured report following strictly defined JSON schemas.

**Step 1: Extraction**
Identify the entity, report type, and double materiality indicators (ESRS 1).

**Step 2: Gap Analysis**
Compare content against ESRS 2 (General Disclosures). List mandatory disclosures and missing sections.

**Step 3: Scoring Rubric (Scoring Logic)**
Evaluate the readiness based on these strict criteria:
- **Ready**: Double materiality assessment is clearly documented AND all ESRS 2 general disclosures are present.
- **Partially Ready**: Some sustainability reporting exists (e.g., GRI references), but lacks formal double materiality or comprehensive ESRS structure.
- **Not Ready**: Missing fundamental elements, no double materiality mention, or purely marketing-focused content.

**Step 4: Summary Report**
Generate an executive summary and a prioritized action roadmap."""

CONTENT_LABEL = "Analyze this content:\n"


def build_readiness_messages(payload: InputPayload) -> List[BaseMessage]:
    """Compose the single analysis request: instructions, then optional text, then optional file."""
    if payload is None or payload.is_empty():
        raise ValueError("Nothing to analyze: provide a file or text.")
    blocks: List[dict[str, Any]] = [{"type": "text", "text": ANALYSIS_PROMPT}]
    if payload.text:
        blocks.append({"type": "text", "text": CONTENT_LABEL + payload.text})
    if payload.file is not None:
        blocks.append({
            "type": "file",
            "source_type": "base64",
            "mime_type": payload.file.mime_type,
            "data": payload.file.base64,
        })
    logger.info(
        "Prepared readiness request: text_chars=%d file=%s (%s)",
        len(payload.text or ""),
        payload.file.name if payload.file else "-",
        payload.file.mime_type if payload.file else "-",
    )
    return [SystemMessage(content=SYSTEM_PROMPT), HumanMessage(content=blocks)]


def response_text(resp: Any) -> str:
    content = getattr(resp, "content", "")
    if isinstance(content, str):
        return content.strip()
    # Some models answer with a list of content blocks
    parts: List[str] = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts).strip()


def request_report(messages: List[BaseMessage], llm: Any) -> str:
    """Issue exactly one model call and return its raw text."""
    try:
        resp = llm.invoke(messages)
    except Exception as e:
        raise ServiceError(f"Gemini request failed: {e}") from e
    text = response_text(resp)
    if not text:
        raise ReportFormatError("No response from AI")
    return text


def _extract_json_block(text: str) -> str:
    t = text.strip()
    # Strip code fences if any
    t = re.sub(r"^```[a-zA-Z]*\n|```$", "", t, flags=re.MULTILINE)
    return t.strip()


def parse_report(text: str) -> CSRDReport:
    if not text or not text.strip():
        raise ReportFormatError("No response from AI")
    try:
        data = json.loads(_extract_json_block(text))
    except json.JSONDecodeError as e:
        logger.warning("Model response is not valid JSON: %s", e)
        raise ReportFormatError(f"Response is not valid JSON: {e}") from e
    try:
        return CSRDReport.model_validate(data)
    except ValidationError as e:
        logger.warning("Model response does not match the report contract: %s", e)
        raise ReportFormatError(f"Response does not match the report schema: {e}") from e
