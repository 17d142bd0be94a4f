"""Permission check API schemas."""

from pydantic import BaseModel, Field

from app.domain.enums import AuthorizationDecision


class ChannelPermissionRequest(BaseModel):
    """Request body for channel/plan manage and access checks."""

    user_id: str = Field(..., min_length=1, max_length=128)
    channel_id: int = Field(..., description="Channel id (non-zero)")
    plan_id: int = Field(default=0, description="Plan id; 0 means no plan-level gate")


class LessonAttemptPermissionRequest(BaseModel):
    """Request body for lesson attempt ownership checks."""

    user_id: str = Field(..., min_length=1, max_length=128)
    lesson_attempt_id: int = Field(..., description="Lesson attempt id (non-zero)")


class GroupAdminPermissionRequest(BaseModel):
    """Request body for learning group admin checks."""

    user_id: str = Field(..., min_length=1, max_length=128)
    group_id: str = Field(..., min_length=1, max_length=128)


class PermissionCheckResponse(BaseModel):
    """Result of a permission check. Denial is a decision, returned with 200."""

    granted: bool
    decision: AuthorizationDecision

    @classmethod
    def from_granted(cls, granted: bool) -> "PermissionCheckResponse":
        return cls(granted=granted, decision=AuthorizationDecision.from_bool(granted))
