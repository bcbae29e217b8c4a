from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

VIDEO_SLOTS = 4
SEED_MAX_ID = 5


class Status(str, Enum):
    SCRIPT_NEEDED = "Script Needed"
    APPROVE_NEEDED = "Approve Needed"
    POSTED = "Posted"
    IN_PROGRESS = "In Progress"
    DRAFT_REQUESTED = "Draft Requested"


ALL_STATUSES = frozenset(Status)


class CamelModel(BaseModel):
    """Stored as camelCase JSON, addressed as snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Video(CamelModel):
    link: str = ""
    posted_date: Optional[date] = None
    views: int = Field(default=0, ge=0)

    @field_validator("views", mode="before")
    @classmethod
    def _views_default(cls, value):
        return 0 if value is None else value

    @field_validator("posted_date", mode="before")
    @classmethod
    def _parse_posted_date(cls, value):
        # Full ISO timestamps ("2024-01-15T00:00:00.000Z") keep only the date part
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            return value[:10]
        if isinstance(value, datetime):
            return value.date()
        return value


def empty_videos() -> list[Video]:
    return [Video() for _ in range(VIDEO_SLOTS)]


def derive_current_views(videos: list[Video]) -> int:
    """Current views = sum of views over the video slots."""
    return sum(video.views or 0 for video in videos[:VIDEO_SLOTS])


def _fill_video_slots(videos: Optional[list]) -> list:
    if videos is None:
        videos = []
    if not isinstance(videos, (list, tuple)):
        raise ValueError(f"videos must be a list, got {type(videos).__name__}")
    videos = list(videos)
    if len(videos) > VIDEO_SLOTS:
        raise ValueError(f"at most {VIDEO_SLOTS} videos per influencer, got {len(videos)}")
    videos.extend(Video() for _ in range(VIDEO_SLOTS - len(videos)))
    return videos


class Influencer(CamelModel):
    model_config = ConfigDict(validate_assignment=True)

    id: int
    username: str
    profile_link: str = ""
    platform: str = ""
    median_views: int = Field(default=0, ge=0)
    total_views: int = Field(default=0, ge=0)
    videos: list[Video] = Field(default_factory=empty_videos)
    status: Status
    paid: bool = False

    @field_validator("videos", mode="before")
    @classmethod
    def _fill_videos(cls, value):
        return _fill_video_slots(value)

    @computed_field(alias="currentViews")
    @property
    def current_views(self) -> int:
        return derive_current_views(self.videos)

    @property
    def is_seed(self) -> bool:
        return self.id <= SEED_MAX_ID


class InfluencerInput(CamelModel):
    """Fields entered in the add form."""

    username: str = ""
    profile_link: str = ""
    platform: str = ""
    median_views: int = Field(default=0, ge=0)
    total_views: int = Field(default=0, ge=0)
    videos: list[Video] = Field(default_factory=empty_videos)
    status: Optional[Status] = None

    @field_validator("videos", mode="before")
    @classmethod
    def _fill_videos(cls, value):
        return _fill_video_slots(value)

    def missing_fields(self) -> list[str]:
        missing = [
            name
            for name in ("username", "profile_link", "platform")
            if not getattr(self, name).strip()
        ]
        if self.status is None:
            missing.append("status")
        return missing


class InfluencerUpdate(CamelModel):
    """Partial update: unset fields are left unchanged, set fields overwrite."""

    username: Optional[str] = None
    profile_link: Optional[str] = None
    platform: Optional[str] = None
    median_views: Optional[int] = Field(default=None, ge=0)
    total_views: Optional[int] = Field(default=None, ge=0)
    videos: Optional[list[Video]] = None
    status: Optional[Status] = None
    paid: Optional[bool] = None

    @field_validator("videos", mode="before")
    @classmethod
    def _fill_videos(cls, value):
        if value is None:
            return None
        return _fill_video_slots(value)

    def changes(self) -> dict:
        # None never overwrites; "" does
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class CampaignStats(BaseModel):
    count: int = 0
    total_views_sum: int = 0
    median_views_sum: int = 0
    per_video_slot_sum: list[int] = Field(default_factory=lambda: [0] * VIDEO_SLOTS)
    real_reach: int = 0
    progress_percent: float = 0.0
    progress_display: str = "0%"
    paid_count: int = 0
