from pydantic import Field, RedisDsn
from pydantic_settings import BaseSettings, SettingsConfigDict


class NotificationSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="", case_sensitive=False)

    redis_url: RedisDsn = Field(default="redis://localhost:6379/0", alias="REDIS_URL")
    notification_stream: str = Field(
        default="allocator:notifications", alias="NOTIFICATION_STREAM"
    )
    notification_stream_maxlen: int = Field(
        default=5000, alias="NOTIFICATION_STREAM_MAXLEN"
    )
    verbose: bool = Field(default=False, alias="ALLOCATOR_VERBOSE")


NOTIFICATION_SETTINGS = NotificationSettings()
