from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Configuration Framework
# =====================================================================
# Settings are grouped by concern and read from environment variables,
# falling back to the defaults below. A .env file is honoured for local
# development. Each group has its own prefix, for example:
#   - POSTGRES_PASSWORD=secret
#   - VALKEY_ENABLED=false
#   - CATALOG_REGISTRY_URL=https://registry.example.com
# =====================================================================


class PostgresSettings(BaseSettings):
    """Settings for the PostgreSQL metadata store."""

    host: str = "localhost"
    port: int = 5432
    user: str = "postgres"
    password: str | None = None  # Must be provided via environment in production
    database: str = "registry"
    min_connections: int = 1
    max_connections: int = 10
    statement_timeout: int | None = None  # Seconds, None = no limit

    model_config = SettingsConfigDict(env_prefix="POSTGRES_")


class ValkeySettings(BaseSettings):
    """Settings for the Valkey cache."""

    enabled: bool = True
    host: str = "localhost"
    port: int = 6379
    password: str | None = None
    db: int = 0
    ssl: bool = False
    socket_timeout: int = 5
    socket_connect_timeout: int = 5
    health_check_interval: int = 30
    max_connections: int = 10

    model_config = SettingsConfigDict(env_prefix="VALKEY_")


class ServerSettings(BaseSettings):
    """Settings for the HTTP server."""

    host: str = "127.0.0.1"  # Only bind to 0.0.0.0 when explicitly configured
    port: int = 8000
    debug: bool = False
    workers: int = 1
    environment: str = "development"

    # CORS settings
    cors_origins: list[str] = ["*"]

    # Rate limiting settings
    rate_limit_rate: float = 30.0  # Requests per second per client
    rate_limit_capacity: int = 50  # Maximum burst per client

    model_config = SettingsConfigDict(env_prefix="SERVER_")


class CatalogSettings(BaseSettings):
    """Catalog behaviour: tarball links, schema bootstrap, caching, API client."""

    # Base URL of the worker that serves tarball downloads
    registry_url: str = "https://datakitnpmregistry.datakit.workers.dev"

    # Create missing tables at startup
    ensure_schema: bool = True

    # Cache lifetimes in seconds
    summaries_cache_ttl: int = 60
    stats_cache_ttl: int = 60
    detail_cache_ttl: int = 60 * 5

    # Used by CatalogClient
    api_base_url: str = "http://localhost:8000/api"
    request_timeout: float = 10.0

    model_config = SettingsConfigDict(env_prefix="CATALOG_")


class AppSettings(BaseSettings):
    """Application metadata settings."""

    name: str = "DataKit Registry Catalog"
    description: str = "Read-only catalog of a private npm registry"
    version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="APP_")


class Settings(BaseSettings):
    """Main application settings that aggregate all sub-settings."""

    app: AppSettings = AppSettings()
    server: ServerSettings = ServerSettings()
    postgres: PostgresSettings = PostgresSettings()
    valkey: ValkeySettings = ValkeySettings()
    catalog: CatalogSettings = CatalogSettings()

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_nested_delimiter="__"
    )


def get_settings() -> Settings:
    """Get application settings from environment variables."""
    return Settings()
