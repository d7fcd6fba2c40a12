import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from survey_api.core.config import Settings
from survey_api.core.errors import StorageError, TooManyFiles
from survey_api.routers.deps import ParticipantId, get_app_settings, get_store
from survey_api.schemas.participant import UploadResponse
from survey_api.services.storage import ParticipantStore
from survey_api.services.uploads import save_participant_uploads

router = APIRouter(prefix="/api/upload", tags=["uploads"])
logger = logging.getLogger(__name__)


@router.post("/{participant_id}", response_model=UploadResponse)
async def upload_photos(
    participant_id: ParticipantId,
    photos: list[UploadFile] | None = File(default=None),
    store: ParticipantStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> UploadResponse:
    photos = photos or []
    try:
        urls = await save_participant_uploads(
            store,
            participant_id,
            photos,
            base_url=settings.base_url,
            max_files=settings.max_upload_files,
        )
    except TooManyFiles as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StorageError as exc:
        logger.exception("photos_upload_failed", extra={"participant_id": participant_id, "file_count": len(photos)})
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Upload failed") from exc
    logger.info("photos_uploaded", extra={"participant_id": participant_id, "file_count": len(urls)})
    return UploadResponse(uploaded=urls)
