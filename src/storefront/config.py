"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="STORE_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Grocery Storefront API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logging level.")
    data_root: Path = Field(default=Path("data"), description="Root directory for carts, orders and static data.")
    catalog_file: Path = Field(
        default=Path("data/products.csv"),
        description="Product catalog used when the database has no products (CSV or XLSX).",
    )
    zone_table_file: Optional[Path] = Field(
        default=None,
        description="Optional JSON file replacing the built-in delivery zone table.",
    )

    # Zone resolution
    zone_fallback: Literal["strict", "grid"] = Field(
        default="strict",
        description="Policy for points outside every named zone: OUT_OF_SERVICE sentinel or synthetic grid code.",
    )
    grid_size_degrees: float = Field(default=0.0225, gt=0.0, description="Grid cell edge (~2.5 km) for the grid fallback.")
    refuse_out_of_service: bool = Field(
        default=True,
        description="Refuse delivery orders whose location resolves to OUT_OF_SERVICE.",
    )
    pickup_zone_code: str = "PICKUP"
    max_active_carts: int = Field(
        default=1000,
        ge=1,
        description="Carts kept in memory; older ones are reloaded from the cart store on next use.",
    )

    # Pricing tiers
    free_delivery_threshold: float = Field(default=100.0, ge=0.0)
    base_delivery_fee: float = Field(default=25.0, ge=0.0)
    handling_fee: float = Field(default=2.0, ge=0.0)
    small_cart_fee: float = Field(default=20.0, ge=0.0)

    accepted_payment_methods: tuple[str, ...] = Field(
        default=("COD",),
        description="Payment methods accepted at checkout. Only cash on delivery is implemented.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
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

    @field_validator("data_root", "catalog_file", "zone_table_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Optional[Path]:
        if value is None or value == "":
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "accepted_payment_methods", mode="before")
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


settings = Settings()
