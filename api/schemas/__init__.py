"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- wizard: Builder wizard session models
"""

from api.schemas.wizard import (
    ActionResponse,
    ArtifactTypeRequest,
    AthletesRequest,
    BlocksUpdateRequest,
    CopyDayRequest,
    CreateSessionRequest,
    JumpRequest,
    MetadataUpdateRequest,
    NavigationResponse,
    NoticeResponse,
    SaveRequest,
    SaveResponse,
    SessionResponse,
    StepResponse,
    TemplateRequest,
    WeekUpdateRequest,
    WeeklyTemplatesResponse,
)

__all__ = [
    # Requests
    "CreateSessionRequest",
    "ArtifactTypeRequest",
    "TemplateRequest",
    "MetadataUpdateRequest",
    "BlocksUpdateRequest",
    "CopyDayRequest",
    "WeekUpdateRequest",
    "AthletesRequest",
    "JumpRequest",
    "SaveRequest",
    # Responses
    "NoticeResponse",
    "StepResponse",
    "SessionResponse",
    "ActionResponse",
    "NavigationResponse",
    "SaveResponse",
    "WeeklyTemplatesResponse",
]
