import json
import logging
import re
import threading
import weakref
from pathlib import Path
from typing import Any

from survey_api.core.errors import InvalidParticipantId, ParticipantNotFound, RecordParseError, StorageError

logger = logging.getLogger(__name__)

PARTICIPANT_ID_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"
_PARTICIPANT_ID_RE = re.compile(PARTICIPANT_ID_PATTERN)


def validate_participant_id(participant_id: str) -> str:
    """Guard every path the store builds.

    Routers already reject these ids through the path pattern, so this only
    fires for direct callers of the store.
    """
    if not isinstance(participant_id, str) or not _PARTICIPANT_ID_RE.match(participant_id):
        raise InvalidParticipantId(f"Invalid participant id: {participant_id!r}")
    return participant_id


class ParticipantStore:
    """One JSON document per participant plus a per-participant upload directory."""

    def __init__(self, data_dir: Path | str, upload_dir: Path | str) -> None:
        self.data_dir = Path(data_dir)
        self.upload_dir = Path(upload_dir)
        # Entries disappear once no save holds the lock.
        self._locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def ensure_dirs(self) -> None:
        for root in (self.data_dir, self.upload_dir):
            try:
                root.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise StorageError(f"Unable to create directory {root}") from exc

    def json_path_for(self, participant_id: str) -> Path:
        return self.data_dir / f"{validate_participant_id(participant_id)}.json"

    def upload_dir_for(self, participant_id: str) -> Path:
        return self.upload_dir / validate_participant_id(participant_id)

    def lock_for(self, participant_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(participant_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[participant_id] = lock
            return lock

    def write_participant(self, participant_id: str, record: dict[str, Any]) -> None:
        path = self.json_path_for(participant_id)
        try:
            path.write_text(json.dumps(record, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Unable to write {path}") from exc

    def read_participant(self, participant_id: str) -> dict[str, Any]:
        path = self.json_path_for(participant_id)
        try:
            raw = path.read_bytes()
        except FileNotFoundError as exc:
            raise ParticipantNotFound(participant_id) from exc
        except OSError as exc:
            raise StorageError(f"Unable to read {path}") from exc
        try:
            record = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RecordParseError(f"Corrupt participant record {path}") from exc
        if not isinstance(record, dict):
            raise RecordParseError(f"Participant record {path} is not a JSON object")
        return record

    def read_participant_or_none(self, participant_id: str) -> dict[str, Any] | None:
        try:
            return self.read_participant(participant_id)
        except ParticipantNotFound:
            return None


def delete_file_if_exists(path: Path | str) -> None:
    p = Path(path)
    if p.exists():
        p.unlink(missing_ok=True)
