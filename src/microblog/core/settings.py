"""Application settings and configuration.

This module defines all configuration options for the microblog service.
Settings are loaded from environment variables with sensible defaults. An
instance is handed to :func:`microblog.main.create_app`; nothing in the
package reads a process-wide settings object.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables, an ``.env`` file,
    or keyword arguments using the upper-case aliases.
    """

    # Application metadata
    app_name: str = Field(default="Microblog", alias="APP_NAME")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Database configuration
    database_url: str = Field(default="sqlite:///./microblog.db", alias="DATABASE_URL")
    test_database_url: str | None = Field(default=None, alias="TEST_DATABASE_URL")
    use_testing_database: bool = Field(default=False, alias="USE_TEST_DATABASE")
    sql_debug: bool = Field(default=False, alias="SQL_DEBUG")
    auto_create_tables: bool = Field(default=True, alias="AUTO_CREATE_TABLES")

    # Session identity (signed token carried in a cookie)
    secret_key: str = Field(alias="SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    session_cookie_name: str = Field(default="microblog_session", alias="SESSION_COOKIE_NAME")
    session_max_age_minutes: int = Field(
        default=60 * 24 * 7,
        alias="SESSION_MAX_AGE_MINUTES",
    )
    session_cookie_secure: bool = Field(default=False, alias="SESSION_COOKIE_SECURE")

    # External identity provider (GitHub-compatible OAuth2 authorization code flow)
    oauth_provider_name: str = Field(default="GitHub", alias="OAUTH_PROVIDER_NAME")
    oauth_client_id: str | None = Field(default=None, alias="OAUTH_CLIENT_ID")
    oauth_client_secret: str | None = Field(default=None, alias="OAUTH_CLIENT_SECRET")
    oauth_callback_url: str = Field(
        default="http://localhost:8000/auth/external/callback",
        alias="OAUTH_CALLBACK_URL",
    )
    oauth_authorize_url: str = Field(
        default="https://github.com/login/oauth/authorize",
        alias="OAUTH_AUTHORIZE_URL",
    )
    oauth_token_url: str = Field(
        default="https://github.com/login/oauth/access_token",
        alias="OAUTH_TOKEN_URL",
    )
    oauth_profile_url: str = Field(
        default="https://api.github.com/user",
        alias="OAUTH_PROFILE_URL",
    )
    oauth_scope: str = Field(default="read:user", alias="OAUTH_SCOPE")
    oauth_http_timeout_seconds: float = Field(
        default=10.0,
        alias="OAUTH_HTTP_TIMEOUT_SECONDS",
    )

    # CORS configuration for browser clients of the JSON API
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

    @property
    def database_url_sync(self) -> str:
        """Return a sync-compatible database URL for tooling such as Alembic."""
        url = self.effective_database_url
        if url.startswith("postgresql+asyncpg"):
            return url.replace("postgresql+asyncpg", "postgresql+psycopg", 1)
        return url

    @property
    def oauth_enabled(self) -> bool:
        """Return True when client credentials for the external provider are configured."""
        return bool(self.oauth_client_id and self.oauth_client_secret)
