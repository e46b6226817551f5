"""Application settings and configuration.

This module defines all configuration options for the Gammy Feed application.
Settings are loaded from environment variables with sensible defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Runtime switches that administrators flip from the admin panel (such as
    ``feedAllowAnonymous``) are not here; they live in the settings store.
    """

    # Application metadata
    app_name: str = Field(default="Gammy Feed", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")

    # Security and authentication
    secret_key: str = Field(alias="SECRET_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./gammy.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")

    # JWT settings shared with the identity provider
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        default=60 * 24 * 7,
        alias="ACCESS_TOKEN_EXPIRE_MINUTES",
    )

    # Feed and pagination
    feed_page_size: int = Field(default=10, alias="FEED_PAGE_SIZE")
    feed_max_page_size: int = Field(default=100, alias="FEED_MAX_PAGE_SIZE")
    top_tags_limit: int = Field(default=15, alias="TOP_TAGS_LIMIT")
    top_authors_limit: int = Field(default=5, alias="TOP_AUTHORS_LIMIT")
    guest_name: str = Field(default="Guest", alias="GUEST_NAME")

    # Notifications
    notifications_list_limit: int = Field(default=50, alias="NOTIFICATIONS_LIST_LIMIT")
    notification_preview_length: int = Field(
        default=50,
        alias="NOTIFICATION_PREVIEW_LENGTH",
    )

    # Anonymous likes are keyed either by client address or by an opaque
    # client-supplied token header.
    anonymous_actor_key: Literal["address", "client_token"] = Field(
        default="address",
        alias="ANONYMOUS_ACTOR_KEY",
    )
    client_token_header: str = Field(default="X-Client-Token", alias="CLIENT_TOKEN_HEADER")

    # Settings store
    settings_value_max_length: int = Field(default=50_000, alias="SETTINGS_VALUE_MAX_LENGTH")

    # CORS configuration for web frontend access
    cors_origins: list[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
    )
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(
        default=["*"],
        alias="CORS_ALLOW_HEADERS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        extra="ignore",
    )

    @property
    def effective_database_url(self) -> str:
        """Return the database URL respecting testing overrides.

        Returns:
            The active database URL (test database if in testing mode, otherwise production)
        """
        if self.use_testing_database and self.test_database_url:
            return self.test_database_url
        return self.database_url


settings = Settings()  # type: ignore[call-arg]
