"""Configuration settings for GroceryGo."""
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Relative to the working directory
DEFAULT_LOG_FILE = Path("logs") / "grocerygo.log"


class GroceryGoSettings(BaseSettings):
    """Application settings with environment variable support."""

    # Database
    DB_URL: str = "sqlite:///grocerygo.db"
    DB_ECHO: bool = False
    SEED_SAMPLE_CATALOG: bool = True

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[Path] = DEFAULT_LOG_FILE
    LOG_FORMAT: str = "detailed"  # simple, detailed
    LOG_RETENTION_DAYS: int = 7
    LOG_ROTATION_SIZE_MB: int = 1

    # Pricing
    DELIVERY_FEE: Decimal = Decimal("2.99")

    # Catalog Settings
    DEFAULT_UNIT: str = "each"
    CATALOG_CATEGORIES: List[str] = [
        "Fruits", "Vegetables", "Dairy", "Bakery", "Meat", "Snacks", "Beverages"
    ]

    # Shopping List Settings
    SHOPPING_LIST_CATEGORIES: List[str] = [
        "Produce", "Dairy", "Meat", "Bakery", "Pantry", "Frozen", "Beverages", "Other"
    ]

    # Store Locator
    DEFAULT_STORE_QUERY: str = "grocery store"
    SEARCH_SPAN_DEGREES: float = 0.05  # roughly 5 km

    model_config = SettingsConfigDict(
        env_prefix="GROCERYGO_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        base_dir = Path.cwd()
        # Anchor relative paths at the working directory the app started in
        if self.DB_URL.startswith("sqlite:///") and self.DB_URL != "sqlite:///:memory:":
            relative_path = self.DB_URL.replace("sqlite:///", "")
            if not Path(relative_path).is_absolute():
                self.DB_URL = f"sqlite:///{base_dir / relative_path}"

        # Ensure log file path is absolute
        if self.LOG_FILE and not self.LOG_FILE.is_absolute():
            self.LOG_FILE = base_dir / self.LOG_FILE

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        valid_formats = ["simple", "detailed"]
        v = v.lower()
        if v not in valid_formats:
            raise ValueError(f"Log format must be one of: {', '.join(valid_formats)}")
        return v

    @field_validator("DELIVERY_FEE")
    @classmethod
    def validate_delivery_fee(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Delivery fee cannot be negative")
        return v.quantize(Decimal("0.01"))

    @field_validator("SEARCH_SPAN_DEGREES")
    @classmethod
    def validate_search_span(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Search span must be positive")
        return v


@lru_cache()
def get_settings() -> GroceryGoSettings:
    """Get cached settings instance."""
    return GroceryGoSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache to force reload from environment."""
    get_settings.cache_clear()
