from typing import Annotated

from fastapi import Path, Request

from survey_api.core.config import Settings
from survey_api.services.storage import PARTICIPANT_ID_PATTERN, ParticipantStore

ParticipantId = Annotated[str, Path(pattern=PARTICIPANT_ID_PATTERN)]


def get_store(request: Request) -> ParticipantStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
