class CampaignError(Exception):
    """Base class for campaign tracker errors."""


class MissingFieldsError(CampaignError, ValueError):
    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__(f"Please fill in all required fields: {', '.join(self.fields)}")


class InfluencerNotFoundError(CampaignError, LookupError):
    def __init__(self, influencer_id: int):
        self.influencer_id = influencer_id
        super().__init__(f"No influencer with id {influencer_id}")


class StorageKeyNotFoundError(CampaignError):
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Nothing stored under key {key!r}")


class PersistenceParseError(CampaignError):
    """Stored campaign data could not be read back."""
