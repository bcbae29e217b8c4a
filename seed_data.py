from datetime import date

from models import Influencer, Status, Video


def _tiktok(username: str) -> str:
    return f"https://www.tiktok.com/@{username}"


def _video(username: str, video_id: int, posted: date, views: int) -> Video:
    return Video(link=f"{_tiktok(username)}/video/{video_id}", posted_date=posted, views=views)


def seed_influencers() -> list[Influencer]:
    """Demo records that are rebuilt on every load and never persisted."""
    return [
        Influencer(
            id=1,
            username="@charlidamelio",
            profile_link=_tiktok("charlidamelio"),
            platform="TikTok",
            median_views=2_500_000,
            total_views=3_000_000,
            videos=[
                _video("charlidamelio", 7300000000000000000, date(2024, 1, 15), 1_200_000),
                _video("charlidamelio", 7300000000000000001, date(2024, 1, 18), 847_500),
                _video("charlidamelio", 7300000000000000002, date(2024, 1, 22), 800_000),
            ],
            status=Status.POSTED,
            paid=True,
        ),
        Influencer(
            id=2,
            username="@addisonre",
            profile_link=_tiktok("addisonre"),
            platform="TikTok",
            median_views=1_800_000,
            total_views=2_200_000,
            videos=[
                _video("addisonre", 7310000000000000000, date(2024, 1, 20), 950_000),
            ],
            status=Status.POSTED,
        ),
        Influencer(
            id=3,
            username="@khaby.lame",
            profile_link=_tiktok("khaby.lame"),
            platform="TikTok",
            median_views=15_000_000,
            total_views=18_000_000,
            status=Status.IN_PROGRESS,
        ),
        Influencer(
            id=4,
            username="@bellapoarch",
            profile_link=_tiktok("bellapoarch"),
            platform="TikTok",
            median_views=3_200_000,
            total_views=4_000_000,
            status=Status.SCRIPT_NEEDED,
        ),
        Influencer(
            id=5,
            username="@spencerx",
            profile_link=_tiktok("spencerx"),
            platform="TikTok",
            median_views=850_000,
            total_views=1_200_000,
            status=Status.APPROVE_NEEDED,
        ),
    ]
