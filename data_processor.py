from __future__ import annotations

import math
from datetime import date
from typing import Iterable, Optional

from models import VIDEO_SLOTS, CampaignStats, Influencer, Status


def filter_by_status(records: list[Influencer], statuses: Iterable[Status]) -> list[Influencer]:
    """Keep records whose status is selected. An empty selection keeps nothing."""
    selected = set(statuses)
    return [record for record in records if record.status in selected]


def calculate_progress(real_reach: int, total_views_sum: int) -> float:
    """Progress = real reach / total views * 100"""
    if total_views_sum <= 0:
        return 0.0
    return real_reach / total_views_sum * 100


def format_progress(percent: float) -> str:
    if 0 < percent < 1:
        return f"{percent:.1f}%"
    return f"{math.floor(percent + 0.5)}%"


def aggregate_stats(records: list[Influencer]) -> CampaignStats:
    slot_sums = [0] * VIDEO_SLOTS
    for record in records:
        for i, video in enumerate(record.videos[:VIDEO_SLOTS]):
            slot_sums[i] += video.views or 0

    total_views_sum = sum(r.total_views for r in records)
    real_reach = sum(slot_sums)
    progress = calculate_progress(real_reach, total_views_sum)

    return CampaignStats(
        count=len(records),
        total_views_sum=total_views_sum,
        median_views_sum=sum(r.median_views for r in records),
        per_video_slot_sum=slot_sums,
        real_reach=real_reach,
        progress_percent=progress,
        progress_display=format_progress(progress),
        paid_count=sum(1 for r in records if r.paid),
    )


def format_url(url: str) -> str:
    if not url:
        return "#"
    if url.startswith(("http://", "https://")):
        return url
    return f"https://{url}"


def profile_display_text(username: str) -> str:
    return username if username.startswith("@") else f"@{username}"


def format_posted_date(posted: Optional[date]) -> str:
    return posted.strftime("%m/%d/%Y") if posted else "No date"


def build_table_rows(records: list[Influencer]) -> list[dict]:
    rows = []
    for r in records:
        row = {
            "ID": r.id,
            "Username": r.username,
            "Profile": format_url(r.profile_link),
            "Platform": r.platform,
            "Views Median": r.median_views,
            "Total Views": r.total_views,
            "Views Now": r.current_views,
        }
        for i, video in enumerate(r.videos[:VIDEO_SLOTS], 1):
            if video.link:
                row[f"Video #{i}"] = (
                    f"{video.views:,} ({format_posted_date(video.posted_date)})"
                )
            else:
                row[f"Video #{i}"] = "-"
        row["Status"] = r.status.value
        row["Paid"] = r.paid
        rows.append(row)
    return rows


def build_totals_row(stats: CampaignStats) -> dict:
    row = {
        "ID": "",
        "Username": "TOTALS",
        "Profile": "",
        "Platform": "-",
        "Views Median": stats.median_views_sum,
        "Total Views": stats.total_views_sum,
        # Views Now total is the real reach
        "Views Now": stats.real_reach,
    }
    for i, slot_sum in enumerate(stats.per_video_slot_sum, 1):
        row[f"Video #{i}"] = f"{slot_sum:,}"
    row["Status"] = f"Real Reach: {stats.real_reach:,}"
    row["Paid"] = stats.paid_count
    return row
