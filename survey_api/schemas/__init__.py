from survey_api.schemas.participant import (
    AnswersPayload,
    ParticipantCreate,
    ParticipantCreated,
    SaveAnswersResponse,
    UploadResponse,
)

__all__ = [
    "ParticipantCreate",
    "ParticipantCreated",
    "AnswersPayload",
    "SaveAnswersResponse",
    "UploadResponse",
]
