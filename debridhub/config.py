"""
debridhub Configuration Management
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from functools import lru_cache

from debridhub.models import DebridProvider, ProviderConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Debrid Services
    use_real_debrid: bool = Field(default=False, alias="USE_REAL_DEBRID")
    real_debrid_token: str = Field(default="", alias="REAL_DEBRID_TOKEN")
    use_torbox: bool = Field(default=False, alias="USE_TORBOX")
    torbox_api_key: str = Field(default="", alias="TORBOX_API_KEY")
    use_alldebrid: bool = Field(default=False, alias="USE_ALLDEBRID")
    alldebrid_api_key: str = Field(default="", alias="ALLDEBRID_API_KEY")
    alldebrid_agent: str = Field(default="debridhub", alias="ALLDEBRID_AGENT")

    # Media APIs
    tmdb_api_key: str = Field(default="", alias="TMDB_API_KEY")

    # HTTP
    request_timeout: float = Field(default=10.0, alias="REQUEST_TIMEOUT")

    # Real-Debrid instant availability limits
    real_debrid_batch_size: int = Field(default=40, ge=1, le=40, alias="REAL_DEBRID_BATCH_SIZE")
    real_debrid_batch_delay: float = Field(default=0.5, ge=0.5, alias="REAL_DEBRID_BATCH_DELAY")

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
        populate_by_name = True

    def provider_config(self, provider: DebridProvider) -> ProviderConfig:
        """Per-provider enable flag and credential"""
        if provider == DebridProvider.REAL_DEBRID:
            return ProviderConfig(enabled=self.use_real_debrid, credential=self.real_debrid_token)
        if provider == DebridProvider.TORBOX:
            return ProviderConfig(enabled=self.use_torbox, credential=self.torbox_api_key)
        return ProviderConfig(enabled=self.use_alldebrid, credential=self.alldebrid_api_key)

    @property
    def has_real_debrid(self) -> bool:
        return self.provider_config(DebridProvider.REAL_DEBRID).is_usable

    @property
    def has_torbox(self) -> bool:
        return self.provider_config(DebridProvider.TORBOX).is_usable

    @property
    def has_alldebrid(self) -> bool:
        return self.provider_config(DebridProvider.ALLDEBRID).is_usable


@lru_cache()
def get_settings() -> Settings:
    return Settings()
