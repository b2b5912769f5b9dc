from __future__ import annotations
from typing import Any, Callable, Dict
from langgraph.graph import StateGraph, END
from ..state import PipelineState
from ..schemas import CSRDReport, InputPayload
from ..llm_provider import get_llm
from ..agents.readiness_agent import build_readiness_messages, request_report, parse_report


def build_graph(llm: Any = None) -> Callable[[InputPayload], CSRDReport]:
    """Compile the readiness pipeline: prepare -> call_model -> parse.

    Node errors are not caught here; they surface from the runner so the
    session controller can settle into its Error state.
    """
    llm_holder = {"llm": llm}

    def prepare_node(state: PipelineState) -> Dict[str, Any]:
        return {"messages": build_readiness_messages(state.payload)}

    def call_model_node(state: PipelineState) -> Dict[str, Any]:
        # Built lazily so a missing key fails here, before any request is sent
        if llm_holder["llm"] is None:
            llm_holder["llm"] = get_llm()
        return {"raw_response": request_report(state.messages, llm_holder["llm"])}

    def parse_node(state: PipelineState) -> Dict[str, Any]:
        return {"report": parse_report(state.raw_response or "")}

    g = StateGraph(PipelineState)
    g.add_node("prepare", prepare_node)
    g.add_node("call_model", call_model_node)
    g.add_node("parse", parse_node)

    g.set_entry_point("prepare")
    g.add_edge("prepare", "call_model")
    g.add_edge("call_model", "parse")
    g.add_edge("parse", END)

    app = g.compile()

    def runner(payload: InputPayload) -> CSRDReport:
        final = app.invoke(PipelineState(payload=payload))
        # LangGraph app.invoke may return a plain dict; coerce into PipelineState
        if isinstance(final, dict):
            final = PipelineState.model_validate(final)
        return final.report

    return runner
