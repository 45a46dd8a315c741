"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass, field
from typing import List, Optional, Protocol


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    namespace: str
    log_level: str
    debug: bool
    brand_name: str


@dataclass
class StorageConfig:
    """Option store configuration."""
    backend: str
    redis_host: str
    redis_port: int
    redis_db: int
    redis_password: Optional[str]
    token_option_key: str

    @property
    def redis_url(self) -> str:
        """Redis URL without the password (passed separately)."""
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"


@dataclass
class AuthConfig:
    """Admin authentication configuration."""
    admin_api_keys: List[str] = field(default_factory=list)


@dataclass
class ContentHostConfig:
    """Content host configuration."""
    kind: str
    timeout: float
    site_url: str
    wordpress_url: Optional[str] = None
    wordpress_username: Optional[str] = None
    wordpress_app_password: Optional[str] = None

    @property
    def is_wordpress(self) -> bool:
        return self.kind == "wordpress"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_storage_config(self) -> StorageConfig:
        """Get option store configuration."""
        ...

    def get_auth_config(self) -> AuthConfig:
        """Get admin authentication configuration."""
        ...

    def get_content_host_config(self) -> ContentHostConfig:
        """Get content host configuration."""
        ...


def _parse_port(value: str) -> int:
    # Kubernetes service links inject REDIS_PORT as tcp://host:port
    if value.startswith("tcp://"):
        return int(value.split(":")[-1])
    return int(value)


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        namespace = os.getenv("API_NAMESPACE", "/publana/v1").rstrip("/")
        if not namespace.startswith("/"):
            namespace = f"/{namespace}"

        return APIConfig(
            port=int(os.getenv("API_PORT", "8080")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            namespace=namespace,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            brand_name=os.getenv("BRAND_NAME", "Publana"),
        )

    def get_storage_config(self) -> StorageConfig:
        """Get option store configuration from environment variables."""
        backend = os.getenv("STORAGE_BACKEND", "redis").lower()
        if backend not in ("redis", "memory"):
            raise ValueError(
                f"Unsupported STORAGE_BACKEND '{backend}'. Use 'redis' or 'memory'."
            )

        return StorageConfig(
            backend=backend,
            redis_host=os.getenv("REDIS_HOST", "localhost"),
            redis_port=_parse_port(os.getenv("REDIS_PORT", "6379")),
            redis_db=int(os.getenv("REDIS_DB", "0")),
            redis_password=os.getenv("REDIS_PASSWORD"),
            token_option_key=os.getenv("TOKEN_OPTION_KEY", "publana_api_tokens"),
        )

    def get_auth_config(self) -> AuthConfig:
        """Get admin authentication configuration from environment variables."""
        keys_env = os.getenv("ADMIN_API_KEYS", "")
        return AuthConfig(
            admin_api_keys=[key.strip() for key in keys_env.split(",") if key.strip()]
        )

    def get_content_host_config(self) -> ContentHostConfig:
        """Get content host configuration from environment variables."""
        kind = os.getenv("CONTENT_HOST", "memory").lower()
        if kind not in ("wordpress", "memory"):
            raise ValueError(
                f"Unsupported CONTENT_HOST '{kind}'. Use 'wordpress' or 'memory'."
            )

        wordpress_url = os.getenv("WORDPRESS_URL")
        if kind == "wordpress" and not wordpress_url:
            raise ValueError(
                "WORDPRESS_URL environment variable is required when CONTENT_HOST=wordpress. "
                "Example: https://blog.example.com"
            )

        return ContentHostConfig(
            kind=kind,
            timeout=float(os.getenv("CONTENT_HOST_TIMEOUT", "30")),
            site_url=os.getenv("SITE_URL", "http://localhost").rstrip("/"),
            wordpress_url=wordpress_url.rstrip("/") if wordpress_url else None,
            wordpress_username=os.getenv("WORDPRESS_USERNAME"),
            wordpress_app_password=os.getenv("WORDPRESS_APP_PASSWORD"),
        )
