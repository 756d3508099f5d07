"""Pydantic schemas for a live practice session.

PracticeSnapshot is read by the presentation collaborator every tick.
SessionCheckpoint is stored by the persistence collaborator so a session can
be picked up again after a reload.
"""

from pydantic import BaseModel, Field, model_validator

from diamond_plans.domain.enums import SessionState
from diamond_plans.schemas.plan import SegmentSchema


class PracticeSnapshot(BaseModel):
    """Derived session state for rendering."""

    state: SessionState
    session_id: str | None = None
    current_index: int = 0
    total_segments: int = 0
    remaining_ms: float = 0.0
    formatted_time: str = "0:00"
    is_warning: bool = False
    is_complete: bool = False
    progress_percent: float = Field(default=0.0, ge=0.0, le=100.0)
    current_segment: SegmentSchema | None = None
    next_segment: SegmentSchema | None = None


class SessionCheckpoint(BaseModel):
    """Resumable session state."""

    session_id: str
    segments: list[SegmentSchema] = Field(..., min_length=1)
    current_index: int = Field(default=0, ge=0)
    remaining_ms: float = Field(..., ge=0.0)
    state: SessionState = SessionState.ACTIVE

    @model_validator(mode="after")
    def validate_index(self) -> "SessionCheckpoint":
        if self.current_index >= len(self.segments):
            raise ValueError(f"current_index {self.current_index} out of range for {len(self.segments)} segments")
        if self.state == SessionState.NOT_STARTED:
            raise ValueError("a checkpoint cannot be taken before the practice starts")
        return self
