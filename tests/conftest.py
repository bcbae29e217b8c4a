import pytest

from campaign_store import CampaignStore
from models import InfluencerInput, Status, Video
from storage import LocalStorage, PersistenceBridge


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def bridge(storage):
    return PersistenceBridge(storage)


@pytest.fixture
def store(bridge):
    store = CampaignStore(bridge)
    store.initialize()
    return store


@pytest.fixture
def reload_store(bridge):
    """Build a new store over the same storage, as a page reload would."""

    def _reload() -> CampaignStore:
        fresh = CampaignStore(bridge)
        fresh.initialize()
        return fresh

    return _reload


@pytest.fixture
def new_influencer():
    return InfluencerInput(
        username="@newcreator",
        profile_link="instagram.com/newcreator",
        platform="Instagram",
        median_views=500_000,
        total_views=2_000_000,
        videos=[
            Video(link="https://instagram.com/reel/a", posted_date="2024-02-01", views=1_200_000),
            Video(link="https://instagram.com/reel/b", posted_date="2024-02-03", views=847_500),
            Video(link="https://instagram.com/reel/c", posted_date="2024-02-05", views=800_000),
            Video(),
        ],
        status=Status.POSTED,
    )
