from datetime import date

import pytest

from data_processor import (
    aggregate_stats,
    build_table_rows,
    build_totals_row,
    calculate_progress,
    filter_by_status,
    format_posted_date,
    format_progress,
    format_url,
    profile_display_text,
)
from models import ALL_STATUSES, Influencer, Status, Video
from seed_data import seed_influencers


def _influencer(id, total_views, views, status=Status.POSTED, paid=False):
    return Influencer(
        id=id,
        username=f"@user{id}",
        total_views=total_views,
        videos=[Video(link=f"v{i}", views=v) for i, v in enumerate(views)],
        status=status,
        paid=paid,
    )


@pytest.mark.parametrize(
    "percent, expected",
    [
        (0, "0%"),
        (0.5, "0.5%"),
        (0.25, "0.2%"),
        (1, "1%"),
        (13.37, "13%"),
        (57.5, "58%"),
        (100, "100%"),
        (150.2, "150%"),
    ],
)
def test_format_progress(percent, expected):
    assert format_progress(percent) == expected


def test_progress_is_zero_without_total_views():
    assert calculate_progress(5_000, 0) == 0.0


def test_no_reach_shows_zero_percent():
    stats = aggregate_stats([_influencer(10, 18_000_000, [0, 0, 0, 0])])
    assert stats.real_reach == 0
    assert stats.progress_display == "0%"


def test_small_progress_keeps_one_decimal():
    stats = aggregate_stats([_influencer(10, 1_000_000, [5_000])])
    assert stats.progress_percent == pytest.approx(0.5)
    assert stats.progress_display == "0.5%"


def test_aggregate_seed_campaign():
    stats = aggregate_stats(seed_influencers())

    assert stats.count == 5
    assert stats.total_views_sum == 28_400_000
    assert stats.median_views_sum == 23_350_000
    assert stats.per_video_slot_sum == [2_150_000, 847_500, 800_000, 0]
    assert stats.real_reach == 3_797_500
    assert stats.paid_count == 1
    assert stats.progress_display == "13%"


def test_real_reach_matches_current_views_for_any_subset():
    records = seed_influencers() + [_influencer(10, 100, [1, 2, 3, 4], paid=True)]
    for subset in (records, records[:2], records[3:], []):
        stats = aggregate_stats(subset)
        assert stats.real_reach == sum(stats.per_video_slot_sum)
        assert stats.real_reach == sum(r.current_views for r in subset)


def test_aggregate_empty():
    stats = aggregate_stats([])
    assert stats.count == 0
    assert stats.real_reach == 0
    assert stats.progress_display == "0%"


def test_filter_empty_selection_shows_nothing():
    assert filter_by_status(seed_influencers(), set()) == []


def test_filter_all_statuses_shows_everything():
    records = seed_influencers()
    assert filter_by_status(records, ALL_STATUSES) == records


def test_filter_keeps_order():
    records = seed_influencers()
    kept = filter_by_status(records, {Status.POSTED, Status.APPROVE_NEEDED})
    assert [r.id for r in kept] == [1, 2, 5]


def test_format_url():
    assert format_url("") == "#"
    assert format_url("https://tiktok.com/@a") == "https://tiktok.com/@a"
    assert format_url("http://tiktok.com/@a") == "http://tiktok.com/@a"
    assert format_url("tiktok.com/@a") == "https://tiktok.com/@a"


def test_profile_display_text():
    assert profile_display_text("@khaby.lame") == "@khaby.lame"
    assert profile_display_text("khaby.lame") == "@khaby.lame"


def test_format_posted_date():
    assert format_posted_date(date(2024, 1, 5)) == "01/05/2024"
    assert format_posted_date(None) == "No date"


def test_table_rows_and_totals():
    records = seed_influencers()
    rows = build_table_rows(records)

    assert rows[0]["Username"] == "@charlidamelio"
    assert rows[0]["Views Now"] == 2_847_500
    assert rows[0]["Video #1"] == "1,200,000 (01/15/2024)"
    assert rows[0]["Video #4"] == "-"
    assert rows[0]["Status"] == "Posted"
    assert rows[0]["Paid"] is True

    totals = build_totals_row(aggregate_stats(records))
    assert totals["Username"] == "TOTALS"
    assert totals["Views Now"] == 3_797_500
    assert totals["Video #2"] == "847,500"
    assert totals["Paid"] == 1
    assert list(totals) == list(rows[0])
