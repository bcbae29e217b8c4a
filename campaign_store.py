from __future__ import annotations

import logging
import time
from typing import Iterable, Optional

from data_processor import aggregate_stats, filter_by_status
from errors import (
    InfluencerNotFoundError,
    MissingFieldsError,
    PersistenceParseError,
    StorageKeyNotFoundError,
)
from models import (
    ALL_STATUSES,
    SEED_MAX_ID,
    CampaignStats,
    Influencer,
    InfluencerInput,
    InfluencerUpdate,
    Status,
)
from seed_data import seed_influencers
from storage import PersistenceBridge

logger = logging.getLogger(__name__)


class CampaignStore:
    """In-memory influencer list (seed + user records) that saves on every change."""

    def __init__(self, bridge: PersistenceBridge):
        self.bridge = bridge
        self.records: list[Influencer] = []
        self.status_filter: set[Status] = set(ALL_STATUSES)
        self._last_id = SEED_MAX_ID

    def initialize(self) -> None:
        self.records = seed_influencers()
        self._last_id = SEED_MAX_ID

        try:
            user_records = self.bridge.load()
        except StorageKeyNotFoundError:
            logger.debug("No saved influencers, starting with demo data only")
            return
        except PersistenceParseError as e:
            logger.error("Error loading saved influencers, using demo data only: %s", e)
            # Drop the corrupt payload
            try:
                self._save()
            except OSError as save_error:
                logger.error("Could not discard corrupt saved influencers: %s", save_error)
            return

        seen_ids = set()
        for record in user_records:
            if record.is_seed:
                logger.warning("Ignoring saved influencer with reserved id %d", record.id)
                continue
            if record.id in seen_ids:
                logger.warning("Ignoring duplicate saved influencer id %d", record.id)
                continue
            seen_ids.add(record.id)
            self.records.append(record)
            self._last_id = max(self._last_id, record.id)

        logger.info(
            "Campaign loaded: %d demo + %d saved influencers",
            SEED_MAX_ID,
            len(self.records) - SEED_MAX_ID,
        )

    def _save(self) -> None:
        self.bridge.save(self.records)

    def _next_id(self) -> int:
        # Millisecond timestamp, bumped when the clock has not moved past the last id
        self._last_id = max(time.time_ns() // 1_000_000, self._last_id + 1)
        return self._last_id

    def _index_of(self, influencer_id: int) -> int:
        for i, record in enumerate(self.records):
            if record.id == influencer_id:
                return i
        raise InfluencerNotFoundError(influencer_id)

    def get(self, influencer_id: int) -> Optional[Influencer]:
        try:
            return self.records[self._index_of(influencer_id)]
        except InfluencerNotFoundError:
            return None

    def add(self, data: InfluencerInput) -> Influencer:
        missing = data.missing_fields()
        if missing:
            raise MissingFieldsError(missing)

        influencer = Influencer(
            id=self._next_id(),
            username=data.username,
            profile_link=data.profile_link,
            platform=data.platform,
            median_views=data.median_views,
            total_views=data.total_views,
            videos=[video.model_copy() for video in data.videos],
            status=data.status,
            paid=False,
        )
        self.records.append(influencer)
        self._save()
        logger.info(
            "Added %s (id=%d, %s, %s)",
            influencer.username,
            influencer.id,
            influencer.platform,
            influencer.status.value,
        )
        return influencer

    def update(self, influencer_id: int, changes: InfluencerUpdate) -> Optional[Influencer]:
        try:
            record = self.records[self._index_of(influencer_id)]
        except InfluencerNotFoundError as e:
            logger.warning("Update skipped: %s", e)
            return None

        fields = changes.changes()
        for name, value in fields.items():
            setattr(record, name, value)

        self._save()
        logger.info("Updated %s (id=%d): %s", record.username, record.id, ", ".join(sorted(fields)))
        return record

    def toggle_paid(self, influencer_id: int) -> Optional[Influencer]:
        record = self.get(influencer_id)
        if record is None:
            logger.warning("Paid toggle skipped, no influencer with id %d", influencer_id)
            return None
        return self.update(influencer_id, InfluencerUpdate(paid=not record.paid))

    def remove(self, influencer_id: int) -> bool:
        try:
            del self.records[self._index_of(influencer_id)]
        except InfluencerNotFoundError as e:
            logger.warning("Delete skipped: %s", e)
            return False

        self._save()
        logger.info("Deleted influencer id=%d", influencer_id)
        return True

    def set_status_filter(self, statuses: Iterable[Status | str]) -> None:
        self.status_filter = {Status(s) for s in statuses}

    def toggle_status(self, status: Status | str) -> None:
        status = Status(status)
        if status in self.status_filter:
            self.status_filter.discard(status)
        else:
            self.status_filter.add(status)

    def show_all(self) -> None:
        self.set_status_filter(ALL_STATUSES)

    def clear_filter(self) -> None:
        self.set_status_filter([])

    def filtered_records(self) -> list[Influencer]:
        return filter_by_status(self.records, self.status_filter)

    def aggregate_stats(self, records: Optional[list[Influencer]] = None) -> CampaignStats:
        if records is None:
            records = self.filtered_records()
        return aggregate_stats(records)
