from __future__ import annotations
import logging
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidTransitionError
from .schemas import CSRDReport, InputPayload


logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = (
    "Analysis failed. Please ensure you have configured your API Key correctly "
    "or try a different file."
)


class AppState(str, Enum):
    IDLE = "IDLE"
    ANALYZING = "ANALYZING"
    COMPLETE = "COMPLETE"
    ERROR = "ERROR"


TRANSITIONS: Dict[AppState, FrozenSet[AppState]] = {
    AppState.IDLE: frozenset({AppState.ANALYZING}),
    AppState.ANALYZING: frozenset({AppState.COMPLETE, AppState.ERROR}),
    AppState.COMPLETE: frozenset({AppState.IDLE}),
    AppState.ERROR: frozenset({AppState.IDLE}),
}


def allowed_transitions(state: AppState) -> FrozenSet[AppState]:
    return TRANSITIONS[state]


class PipelineState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    # Input
    payload: InputPayload

    # Intermediate
    messages: List[Any] = Field(default_factory=list)
    raw_response: Optional[str] = None

    # Output
    report: Optional[CSRDReport] = None


class AnalysisSession(BaseModel):
    """
    Application state controller for one browser session.

    Idle -> Analyzing -> Complete | Error -> Idle. A submission is only accepted
    from Idle, so at most one analysis is in flight per session.
    """

    app_state: AppState = AppState.IDLE
    payload: Optional[InputPayload] = None
    report_data: Optional[CSRDReport] = None
    error_message: Optional[str] = None

    def _move(self, target: AppState) -> None:
        if target not in TRANSITIONS[self.app_state]:
            raise InvalidTransitionError(f"Cannot go from {self.app_state.value} to {target.value}")
        logger.info("State %s -> %s", self.app_state.value, target.value)
        self.app_state = target

    def can_submit(self, payload: Optional[InputPayload]) -> bool:
        return self.app_state is AppState.IDLE and payload is not None and not payload.is_empty()

    def submit(self, payload: Optional[InputPayload]) -> bool:
        """Start an analysis. Empty input is a no-op and leaves the session Idle."""
        if self.app_state is not AppState.IDLE:
            raise InvalidTransitionError(f"Cannot submit while {self.app_state.value}")
        if payload is None or payload.is_empty():
            return False
        self._move(AppState.ANALYZING)
        self.payload = payload
        self.error_message = None
        return True

    def complete(self, report: CSRDReport) -> None:
        self._move(AppState.COMPLETE)
        self.report_data = report
        self.payload = None

    def fail(self, exc: BaseException) -> None:
        self._move(AppState.ERROR)
        logger.error("Analysis failed", exc_info=exc)
        # report_data is left as it was
        self.error_message = GENERIC_ERROR_MESSAGE
        self.payload = None

    def run(self, analyze: Callable[[InputPayload], CSRDReport]) -> AppState:
        """Perform the pending analysis and settle into Complete or Error."""
        if self.app_state is not AppState.ANALYZING or self.payload is None:
            raise InvalidTransitionError(f"No analysis pending while {self.app_state.value}")
        try:
            report = analyze(self.payload)
        except Exception as e:
            self.fail(e)
        else:
            self.complete(report)
        return self.app_state

    def reset(self) -> None:
        if self.app_state not in (AppState.COMPLETE, AppState.ERROR):
            raise InvalidTransitionError(f"Cannot reset while {self.app_state.value}")
        self._move(AppState.IDLE)
        self.payload = None
        self.report_data = None
        self.error_message = None
