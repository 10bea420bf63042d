# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Environment-driven configuration of the legacy HEMIS API.

Each concern (database, Redis, OAuth, government upstreams, ...) reads
its own prefixed variables; defaults match the old-hemis deployment.
``Settings`` groups them and ``get_settings()`` hands out one shared
instance.

Example:
    >>> from hemis.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.legacy_oauth.client_id)
    'client'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-this-in-production"


class DatabaseSettings(BaseSettings):
    """Legacy HEMIS PostgreSQL database configuration.

    The schema is owned by the old CUBA application; table and column
    names must not be changed.

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
        echo: Log every SQL statement.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
    )

    user: str = "hemis"
    password: SecretStr = SecretStr("hemis_password")
    host: str = "localhost"
    port: int = 5432
    database: str = "hemis"
    pool_size: int = 10
    max_overflow: int = 20
    echo: bool = False

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"

    @property
    def sync_url(self) -> str:
        """Build the sync database URL for migrations."""
        pwd = self.password.get_secret_value()
        return f"postgresql://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"


class RedisSettings(BaseSettings):
    """Redis configuration for captcha storage, token caches and rate limits.

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
    max_connections: int = 50

    @property
    def url(self) -> str:
        """redis:// URL including password and database number."""
        if self.password is not None and self.password.get_secret_value():
            pwd = self.password.get_secret_value()
            return f"redis://:{pwd}@{self.host}:{self.port}/{self.database}"
        return f"redis://{self.host}:{self.port}/{self.database}"


class JWTSettings(BaseSettings):
    """JWT signing configuration.

    Attributes:
        secret_key: Secret key for signing tokens.
        algorithm: JWT signing algorithm.
        issuer: Value of the iss claim.
    """

    model_config = SettingsConfigDict(
        env_prefix="JWT_",
        extra="ignore",
    )

    secret_key: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    algorithm: str = "HS256"
    issuer: str = "hemis"


class LegacyOAuthSettings(BaseSettings):
    """CUBA REST OAuth2 token endpoint configuration.

    University clients authenticate with HTTP Basic "client:secret",
    exactly as they did against the CUBA application.

    Attributes:
        client_id: OAuth2 client identifier.
        client_secret: OAuth2 client secret.
        expires_in: Access token lifetime in seconds reported to clients.
        refresh_token_expire_days: Refresh token lifetime.
        scope: Scope value returned with every token.
    """

    model_config = SettingsConfigDict(
        env_prefix="LEGACY_OAUTH_",
        extra="ignore",
    )

    client_id: str = "client"
    client_secret: SecretStr = SecretStr("secret")
    expires_in: int = 2591998
    refresh_token_expire_days: int = 30
    scope: str = "rest-api"


class CaptchaSettings(BaseSettings):
    """Captcha generation configuration.

    Attributes:
        length: Number of digits in a numeric captcha.
        ttl_seconds: Lifetime of a captcha value in Redis.
        width: Image width in pixels.
        height: Image height in pixels.
        return_value: Include the solution in the response (testing only).
    """

    model_config = SettingsConfigDict(
        env_prefix="CAPTCHA_",
        extra="ignore",
    )

    length: int = 5
    ttl_seconds: int = 300
    width: int = 200
    height: int = 60
    return_value: bool = False


class ExternalHTTPSettings(BaseSettings):
    """Shared settings for outbound calls to government services.

    Attributes:
        timeout: Request timeout in seconds.
        verify_ssl: Verify upstream TLS certificates.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXTERNAL_HTTP_",
        extra="ignore",
    )

    timeout: float = 30.0
    verify_ssl: bool = True


class GuvdSettings(BaseSettings):
    """GUVD (interior ministry) OAuth2 and API configuration.

    Attributes:
        token_url: OAuth2 token endpoint.
        client_id: OAuth2 client id used for HTTP Basic.
        client_secret: OAuth2 client secret.
        username: Password-grant username.
        password: Password-grant password.
        api_url: Base URL of the GUVD data API.
        token_cache_seconds: How long a fetched token is reused.
    """

    model_config = SettingsConfigDict(
        env_prefix="GUVD_",
        extra="ignore",
    )

    token_url: str = "https://iskm.egov.uz:9444/oauth2/token"
    client_id: str = ""
    client_secret: SecretStr = SecretStr("")
    username: str = ""
    password: SecretStr = SecretStr("")
    api_url: str = "https://api.gov.uz/guvd"
    token_cache_seconds: int = 3600


class PassportSettings(BaseSettings):
    """Passport data service configuration.

    Attributes:
        url: Base URL of the passport data API.
        token: API token passed as a query parameter.
    """

    model_config = SettingsConfigDict(
        env_prefix="PASSPORT_",
        extra="ignore",
    )

    url: str = "https://api.gov.uz/passport"
    token: SecretStr = SecretStr("")


class PersonalDataSettings(BaseSettings):
    """MVD personal data endpoint configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PERSONAL_DATA_",
        extra="ignore",
    )

    url: str = "https://talaba.edu.uz/api/my_edu_uz/student_mvd_hemis.php"
    token: SecretStr = SecretStr("")


class TaxSettings(BaseSettings):
    """Tax committee API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TAX_",
        extra="ignore",
    )

    url: str = "https://api.gov.uz/tax"
    token: SecretStr = SecretStr("")


class SocialSettings(BaseSettings):
    """Social protection registry API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_",
        extra="ignore",
    )

    url: str = "https://api.gov.uz/social"
    token: SecretStr = SecretStr("")


class EmploymentSettings(BaseSettings):
    """Employment (labour ministry) registry API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="EMPLOYMENT_",
        extra="ignore",
    )

    url: str = "https://api.gov.uz/employment"
    token: SecretStr = SecretStr("")


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration.

    Attributes:
        requests_per_minute: Maximum requests per minute per client.
        token_requests_per_minute: Limit for the OAuth token endpoint.
        enabled: Whether rate limiting is active.
    """

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        extra="ignore",
    )

    requests_per_minute: int = 600
    token_requests_per_minute: int = 30
    enabled: bool = True


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

    origins: str = "*"
    allow_credentials: bool = False
    allow_methods: list[str] = ["*"]
    allow_headers: list[str] = ["*"]

    @property
    def origins_list(self) -> list[str]:
        """Comma-separated origins as a list."""
        return [origin.strip() for origin in self.origins.split(",") if origin.strip()]


class APISettings(BaseSettings):
    """API server configuration.

    Attributes:
        host: Host to bind to.
        port: Port to listen on.
        workers: Number of worker processes.
        reload: Whether to enable auto-reload.
        max_page_size: Upper bound for the limit query parameter.
        timezone: Zone used for the legacy naive audit timestamps.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8080
    workers: int = 2
    reload: bool = False
    max_page_size: int = 5000
    timezone: str = "Asia/Tashkent"


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        db: Legacy database settings.
        redis: Redis settings.
        jwt: JWT signing settings.
        legacy_oauth: CUBA token endpoint settings.
        captcha: Captcha settings.
        external_http: Outbound HTTP settings.
        guvd: GUVD settings.
        passport: Passport data settings.
        personal_data: MVD personal data settings.
        tax: Tax API settings.
        social: Social registry settings.
        employment: Employment registry settings.
        rate_limit: Rate limiting settings.
        cors: CORS settings.
        api: API server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # One group per concern, each with its own env prefix
    db: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    jwt: JWTSettings = Field(default_factory=JWTSettings)
    legacy_oauth: LegacyOAuthSettings = Field(default_factory=LegacyOAuthSettings)
    captcha: CaptchaSettings = Field(default_factory=CaptchaSettings)
    external_http: ExternalHTTPSettings = Field(default_factory=ExternalHTTPSettings)
    guvd: GuvdSettings = Field(default_factory=GuvdSettings)
    passport: PassportSettings = Field(default_factory=PassportSettings)
    personal_data: PersonalDataSettings = Field(default_factory=PersonalDataSettings)
    tax: TaxSettings = Field(default_factory=TaxSettings)
    social: SocialSettings = Field(default_factory=SocialSettings)
    employment: EmploymentSettings = Field(default_factory=EmploymentSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Refuse development-only values when running in production.

        Raises:
            ValueError: On the default JWT secret or an exposed captcha value.
        """
        if self.environment == "production":
            if self.jwt.secret_key.get_secret_value() == DEFAULT_JWT_SECRET:
                raise ValueError(
                    "JWT secret key is still the default; set JWT_SECRET_KEY "
                    "before running in production."
                )
            if self.captcha.return_value:
                raise ValueError("CAPTCHA_RETURN_VALUE must not be enabled in production.")
        return self

    @property
    def is_development(self) -> bool:
        """True for local development."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """True when deployed for universities."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide Settings, reading the environment once."""
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached Settings so the next call re-reads the environment."""
    get_settings.cache_clear()
