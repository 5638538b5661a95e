from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from repo root if present
ENV_PATH = Path(__file__).resolve().parents[3] / ".env"
if ENV_PATH.exists():
    load_dotenv(dotenv_path=ENV_PATH)

PACKAGE_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    """Storefront settings (loaded from env).

    Persistence:
      - "store_backend" picks the document store: JSON files on disk or Redis.

    Checkout:
      - "checkout_clear_on_failure" empties the cart even when the order
        could not be persisted (the legacy behaviour). Off by default.
      - "orders_api_url" sends checkout orders to a remote /orders endpoint
        instead of writing them in-process.
    """

    # --- service ---
    service_name: str = Field(default="storefront", description="Service name")
    version: str = Field(default="0.1.0", description="Service version")
    environment: str = Field(default="dev", description="Environment name (dev/staging/prod)")
    host: str = Field(default="0.0.0.0", description="API bind host")
    port: int = Field(default=5000, description="API bind port")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")
    log_format: str = Field(default="text", description="text|json")

    # --- CORS ---
    cors_allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_methods: List[str] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: List[str] = Field(default_factory=lambda: ["*"])

    # --- Document store ---
    store_backend: str = Field(default="file", description="file|redis")
    store_dir: Path = Field(default=Path("workspace/.store"), description="Root dir for the file backend")
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    store_key_prefix: str = Field(default="storefront", description="Key prefix for Redis collections")

    # --- Checkout ---
    checkout_clear_on_failure: bool = Field(
        default=False,
        description="Empty the cart even if the order request failed",
    )
    orders_api_url: str = Field(
        default="",
        description="Base URL of a remote orders API; empty writes orders in-process",
    )

    # --- UI ---
    store_title: str = Field(default="My E-Commerce Store", description="Page title")
    templates_dir: Path = Field(default=PACKAGE_ROOT / "app" / "templates")
    static_root: Path = Field(default=PACKAGE_ROOT / "static", description="Served at /static")
    cart_cookie_name: str = Field(default="cart_session", description="Cookie carrying the cart session id")
    cart_session_ttl_minutes: int = Field(default=120, description="Idle carts older than this are dropped")

    # pydantic-settings v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ---- Convenience helpers ----
    @property
    def uses_remote_orders(self) -> bool:
        """True when checkout should POST to a remote orders API."""
        return bool(self.orders_api_url.strip())


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
