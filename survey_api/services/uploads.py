import logging
import re
import time
from collections.abc import Sequence
from pathlib import Path

from fastapi import UploadFile

from survey_api.core.errors import StorageError, TooManyFiles
from survey_api.services.ids import generate_id
from survey_api.services.storage import ParticipantStore, delete_file_if_exists

logger = logging.getLogger(__name__)

UPLOADS_URL_PREFIX = "/uploads"
CHUNK_SIZE = 1024 * 1024
_SAFE_SUFFIX = re.compile(r"^\.[A-Za-z0-9]{1,16}$")


def upload_extension(filename: str | None) -> str:
    ext = Path(filename or "").suffix
    return ext if _SAFE_SUFFIX.match(ext) else ".bin"


def upload_filename(original_name: str | None) -> str:
    return f"{int(time.time() * 1000)}_{generate_id()}{upload_extension(original_name)}"


def upload_url(base_url: str, participant_id: str, filename: str) -> str:
    return f"{base_url.rstrip('/')}{UPLOADS_URL_PREFIX}/{participant_id}/{filename}"


async def _write_upload(file: UploadFile, destination: Path) -> int:
    total = 0
    with destination.open("wb") as handle:
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break
            total += len(chunk)
            handle.write(chunk)
    await file.close()
    return total


async def save_participant_uploads(
    store: ParticipantStore,
    participant_id: str,
    files: Sequence[UploadFile],
    base_url: str = "",
    max_files: int = 20,
) -> list[str]:
    """Store every file under the participant's upload directory.

    Returns one URL per file in the order received. Either the whole batch is
    stored or nothing is: files written before a failure are removed.
    """
    if len(files) > max_files:
        raise TooManyFiles(len(files), max_files)

    dest_dir = store.upload_dir_for(participant_id)
    written: list[Path] = []
    urls: list[str] = []
    try:
        dest_dir.mkdir(parents=True, exist_ok=True)
        for file in files:
            final_path = dest_dir / upload_filename(file.filename)
            written.append(final_path)
            size = await _write_upload(file, final_path)
            logger.debug("upload_stored", extra={"participant_id": participant_id, "stored_name": final_path.name, "bytes": size})
            urls.append(upload_url(base_url, participant_id, final_path.name))
    except OSError as exc:
        for path in written:
            delete_file_if_exists(path)
        raise StorageError(f"Unable to store uploads for {participant_id}") from exc
    return urls
