from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from errors import PersistenceParseError, StorageKeyNotFoundError
from models import SEED_MAX_ID, Influencer

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "userInfluencers"

_influencer_list = TypeAdapter(list[Influencer])


class LocalStorage:
    """String key-value store kept in a single JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PersistenceParseError(f"Cannot read storage file {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise PersistenceParseError(f"Storage file {self.path} does not hold a JSON object")
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            os.unlink(tmp_name)
            raise

    def get_item(self, key: str) -> Optional[str]:
        return self._read().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except PersistenceParseError:
            logger.warning("Overwriting unreadable storage file %s", self.path)
            data = {}
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class PersistenceBridge:
    """Saves and restores the user-added influencers (ids above the seed range)."""

    def __init__(self, storage: LocalStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key

    def save(self, records: list[Influencer]) -> int:
        user_records = [r for r in records if r.id > SEED_MAX_ID]
        payload = _influencer_list.dump_json(user_records, by_alias=True).decode("utf-8")
        self.storage.set_item(self.key, payload)
        logger.debug("Saved %d user influencers under %r", len(user_records), self.key)
        return len(user_records)

    def load(self) -> list[Influencer]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            raise StorageKeyNotFoundError(self.key)
        if not isinstance(raw, str):
            raise PersistenceParseError(f"Value under {self.key!r} is not a string")
        try:
            # currentViews in the payload is ignored and re-derived from the videos
            records = _influencer_list.validate_json(raw)
        except ValidationError as e:
            raise PersistenceParseError(
                f"Invalid influencer data under {self.key!r}: {e.error_count()} error(s)"
            ) from e
        logger.info("Loaded %d user influencers from %s", len(records), self.storage.path)
        return records
