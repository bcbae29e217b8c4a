import pytest

from config import DEFAULT_PLATFORMS, AppConfig, load_config


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "config.yaml"))


def test_load_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "storage:\n"
        "  path: data/campaign.json\n"
        "  key: springCampaign\n"
        "dashboard:\n"
        "  title: Spring Launch\n"
        "  platforms: [YouTube, TikTok]\n"
    )

    config = load_config(str(path))
    assert config.storage_path == "data/campaign.json"
    assert config.storage_key == "springCampaign"
    assert config.title == "Spring Launch"
    assert config.platforms == ["YouTube", "TikTok"]


def test_empty_config_uses_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")

    assert load_config(str(path)) == AppConfig()
    assert AppConfig().platforms == DEFAULT_PLATFORMS
