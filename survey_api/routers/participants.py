import logging

from fastapi import APIRouter, Depends, HTTPException, status

from survey_api.core.errors import StorageError
from survey_api.routers.deps import get_store
from survey_api.schemas.participant import ParticipantCreate, ParticipantCreated
from survey_api.services.ids import generate_id
from survey_api.services.merge import new_participant_record, utc_now_iso
from survey_api.services.storage import ParticipantStore

router = APIRouter(prefix="/api/participants", tags=["participants"])
logger = logging.getLogger(__name__)


@router.post("", response_model=ParticipantCreated)
def create_participant(
    payload: ParticipantCreate | None = None,
    store: ParticipantStore = Depends(get_store),
) -> ParticipantCreated:
    participant_id = generate_id()
    record = new_participant_record(participant_id, payload.name if payload else None, utc_now_iso())
    try:
        store.write_participant(participant_id, record)
    except StorageError as exc:
        logger.exception("participant_create_failed", extra={"participant_id": participant_id})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create participant"
        ) from exc
    logger.info("participant_created", extra={"participant_id": participant_id})
    return ParticipantCreated(id=participant_id, name=record["name"], created_at=record["created_at"])
