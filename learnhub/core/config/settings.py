# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

Settings are loaded from environment variables (and an optional ``.env``
file) with development-friendly defaults. The Settings class aggregates all
subsettings; get_settings() returns a cached instance for dependency
injection.

Example:
    >>> from learnhub.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> settings.session.name
    'session'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-this-in-production"


class JWTSettings(BaseSettings):
    """Identity token signing configuration.

    Attributes:
        secret_key: Secret key for signing identity tokens.
        algorithm: JWT signing algorithm.
        token_expire_minutes: Identity token lifetime.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        extra="ignore",
    )

    secret_key: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    algorithm: str = "HS256"
    token_expire_minutes: int = 60


class SessionCookieSettings(BaseSettings):
    """Session cookie written by the token bridge.

    Attributes:
        name: Cookie name.
        max_age_seconds: Cookie lifetime.
        secure: Only send the cookie over HTTPS.
        httponly: Hide the cookie from browser scripts.
        samesite: SameSite policy.
        path: Cookie path.
        post_auth_path: Where the client goes after a successful sign-up.
    """

    model_config = SettingsConfigDict(
        env_prefix="SESSION_COOKIE_",
        extra="ignore",
    )

    name: str = "session"
    max_age_seconds: int = 60 * 60 * 24 * 5
    secure: bool = True
    httponly: bool = True
    samesite: Literal["lax", "strict", "none"] = "lax"
    path: str = "/"
    post_auth_path: str = "/courses"


class IdentitySettings(BaseSettings):
    """Identity provider and registration policy.

    Attributes:
        min_password_length: Length checked by the registration form.
        provider_min_password_length: Length enforced by the identity backend.
        google_client_id: OAuth client id Google ID tokens must be issued for.
        bcrypt_rounds: Cost factor for stored password hashes.
    """

    model_config = SettingsConfigDict(
        env_prefix="IDENTITY_",
        extra="ignore",
    )

    min_password_length: int = 6
    provider_min_password_length: int = 6
    google_client_id: str | None = None
    bcrypt_rounds: int = 12


class StoreSettings(BaseSettings):
    """Profile document store configuration.

    Attributes:
        backend: Which document store implementation to use.
        users_collection: Collection holding user profile documents.
    """

    model_config = SettingsConfigDict(
        env_prefix="STORE_",
        extra="ignore",
    )

    backend: Literal["memory", "redis"] = "memory"
    users_collection: str = "users"


class RedisSettings(BaseSettings):
    """Redis configuration for the Redis document store.

    Attributes:
        host: Redis server host.
        port: Redis server port.
        password: Redis password.
        database: Redis database number.
        max_connections: Maximum connection pool size.
    """

    model_config = SettingsConfigDict(
        env_prefix="REDIS_",
        extra="ignore",
    )

    host: str = "localhost"
    port: int = 6379
    password: SecretStr | None = None
    database: int = 0
    max_connections: int = 20

    @property
    def url(self) -> str:
        """Build the Redis connection URL."""
        if self.password is None:
            return f"redis://{self.host}:{self.port}/{self.database}"
        pwd = self.password.get_secret_value()
        return f"redis://:{pwd}@{self.host}:{self.port}/{self.database}"


class CORSSettings(BaseSettings):
    """CORS configuration for API.

    Attributes:
        origins: Comma-separated list of allowed origins.
        allow_credentials: Whether to allow credentials.
        allow_methods: Allowed HTTP methods.
        allow_headers: Allowed HTTP headers.
    """

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        extra="ignore",
    )

    origins: str = "http://localhost:3000"
    allow_credentials: bool = True
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """Parse origins string into a list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """API server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        jwt: Identity token settings.
        session: Session cookie settings.
        identity: Identity provider and password policy settings.
        store: Document store settings.
        redis: Redis settings.
        cors: CORS settings.
        api: API server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "test", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    jwt: JWTSettings = Field(default_factory=JWTSettings)
    session: SessionCookieSettings = Field(default_factory=SessionCookieSettings)
    identity: IdentitySettings = Field(default_factory=IdentitySettings)
    store: StoreSettings = Field(default_factory=StoreSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Reject insecure defaults in production.

        Raises:
            ValueError: If running in production with insecure defaults.
        """
        if self.environment == "production":
            if self.jwt.secret_key.get_secret_value() == DEFAULT_JWT_SECRET:
                raise ValueError(
                    "JWT secret key must be changed from default in production. "
                    "Set JWT_SECRET_KEY environment variable."
                )
            if not self.session.secure:
                raise ValueError("Session cookies must be secure in production.")
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Call clear_settings_cache() to reload settings from the environment.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
