from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_PLATFORMS = ["Instagram", "TikTok", "Instagram + TikTok"]


@dataclass
class AppConfig:
    # Local storage
    storage_path: str = "campaign_storage.json"
    storage_key: str = "userInfluencers"

    # Dashboard
    title: str = "Influencer Campaign Tracker"
    platforms: list[str] = field(default_factory=lambda: list(DEFAULT_PLATFORMS))


def load_config(config_path: str = "config.yaml") -> AppConfig:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    storage = raw.get("storage", {})
    dashboard = raw.get("dashboard", {})

    return AppConfig(
        storage_path=storage.get("path", "campaign_storage.json"),
        storage_key=storage.get("key", "userInfluencers"),
        title=dashboard.get("title", "Influencer Campaign Tracker"),
        platforms=list(dashboard.get("platforms", DEFAULT_PLATFORMS)),
    )
