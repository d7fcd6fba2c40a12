from typing import Any

from pydantic import BaseModel, ConfigDict


class ParticipantCreate(BaseModel):
    name: Any = None


class ParticipantCreated(BaseModel):
    id: str
    name: str | None
    created_at: str


class AnswersPayload(BaseModel):
    """Incoming save. Fields are opaque; unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    name: Any = None
    answers: Any = None
    roles: Any = None
    photoMap: Any = None


class SaveAnswersResponse(BaseModel):
    ok: bool = True
    updated_at: str


class UploadResponse(BaseModel):
    uploaded: list[str]
