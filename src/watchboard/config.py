"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Media tracker (GraphQL)
    tracker_api_url: str = "https://graphql.anilist.co"
    tracker_user_id: int = 0
    tracker_query_path: str | None = None  # falls back to the packaged query

    # Release feed (RSS)
    release_feed_url: str = "https://subsplease.org/rss/?r=720"

    # Alt-title document store
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "watchboard"
    alt_titles_collection: str = "alt_titles"

    # Outbound request settings
    http_timeout: float = 30.0
    aggregation_timeout: float | None = None  # no deadline unless configured

    # API settings
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000


# Global settings instance
settings = Settings()
