"""Application configuration and settings management."""

from typing import Annotated, Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="BACKOFFICE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "BIGD Back-Office API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level for the service.")
    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    subscription_poll_seconds: float = Field(
        default=5.0,
        gt=0.0,
        description="Polling interval used by live subscriptions against Supabase tables.",
    )

    # Human-readable codes
    agent_code_prefix: str = "BIGD"
    customer_code_prefix: str = "CUST"
    order_code_prefix: str = "ORD"
    code_width: int = Field(default=4, ge=1)
    code_allocation_retries: int = Field(default=3, ge=0)

    # Reporting
    default_sales_target: float = Field(default=50000.0, gt=0.0)
    top_n: int = Field(default=5, ge=1)
    currency_symbol: str = "₱"

    # Geocoding (optional, external)
    geocoding_api_key: Optional[str] = Field(
        default=None,
        description="Google Geocoding API key. Geocoding is skipped when unset.",
    )
    geocoding_base_url: str = "https://maps.googleapis.com/maps/api/geocode/json"
    geocoding_max_retries: int = Field(default=2, ge=0)
    geocoding_backoff_seconds: float = Field(default=0.5, ge=0.0)

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("agent_code_prefix", "customer_code_prefix", "order_code_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        prefix = value.strip().upper()
        if not prefix:
            raise ValueError("code prefixes must not be empty")
        return prefix


settings = Settings()
