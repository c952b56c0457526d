"""Flat JSON file store"""
import os
import tempfile
from pathlib import Path
from typing import Union
from pydantic import ValidationError
from ratify.errors import StoreError
from ratify.models.candidates import StoreData
from ratify.utils.logging import get_logger
from ratify.utils.retry import file_retry

logger = get_logger(__name__)


class JsonStore:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> StoreData:
        """Read the data file; a missing file is an empty store"""
        if not self.path.exists():
            return StoreData()

        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Failed to read data file", path=str(self.path), error=str(e))
            raise StoreError(f"Cannot read data file: {e}") from e

        if not text.strip():
            return StoreData()

        try:
            return StoreData.model_validate_json(text)
        except ValidationError as e:
            logger.error("Malformed data file", path=str(self.path), errors=e.error_count())
            raise StoreError(f"Malformed data file {self.path}") from e

    def save(self, data: StoreData):
        """Write to a temp file beside the target and atomically replace it"""
        payload = data.model_dump_json(by_alias=True, indent=2)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".ratify-", suffix=".tmp")
        except OSError as e:
            raise StoreError(f"Cannot write data file: {e}") from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            self._replace(tmp_name)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            logger.error("Failed to save data file", path=str(self.path), error=str(e))
            raise StoreError(f"Cannot write data file: {e}") from e

        logger.debug(
            "Saved data file",
            path=str(self.path),
            members=len(data.members),
            candidates=len(data.candidates),
        )

    @file_retry()
    def _replace(self, tmp_name: str):
        os.replace(tmp_name, self.path)
