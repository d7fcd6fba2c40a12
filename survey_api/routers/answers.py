import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from survey_api.core.errors import ParticipantNotFound, StorageError
from survey_api.routers.deps import ParticipantId, get_store
from survey_api.schemas.participant import AnswersPayload, SaveAnswersResponse
from survey_api.services.merge import merge_participant_record, utc_now_iso
from survey_api.services.storage import ParticipantStore

router = APIRouter(prefix="/api/answers", tags=["answers"])
logger = logging.getLogger(__name__)


@router.get("/{participant_id}")
def get_answers(participant_id: ParticipantId, store: ParticipantStore = Depends(get_store)) -> JSONResponse:
    try:
        record = store.read_participant(participant_id)
    except ParticipantNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found") from exc
    except StorageError as exc:
        logger.exception("answers_read_failed", extra={"participant_id": participant_id})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to read data") from exc
    return JSONResponse(content=record)


@router.post("/{participant_id}", response_model=SaveAnswersResponse)
def save_answers(
    participant_id: ParticipantId,
    payload: AnswersPayload | None = None,
    store: ParticipantStore = Depends(get_store),
) -> SaveAnswersResponse:
    incoming = payload.model_dump(exclude_unset=True) if payload else {}
    try:
        with store.lock_for(participant_id):
            current = store.read_participant_or_none(participant_id)
            merged = merge_participant_record(participant_id, current, incoming, utc_now_iso())
            store.write_participant(participant_id, merged)
    except StorageError as exc:
        logger.exception("answers_save_failed", extra={"participant_id": participant_id})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save data") from exc
    logger.info(
        "answers_saved",
        extra={"participant_id": participant_id, "new_record": current is None, "fields": sorted(incoming)},
    )
    return SaveAnswersResponse(ok=True, updated_at=merged["updated_at"])
