"""Configuration loaded from environment variables (and a .env file if present)."""
import os
from dataclasses import dataclass, field
from decimal import Decimal
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

from schemas import Category, PricingConfig

load_dotenv()

DEFAULT_REQUIRED = "CPU,Motherboard,PSU"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def parse_categories(raw: str) -> List[Category]:
    """Parse a comma separated list of category names (case-insensitive)."""
    by_name = {category.value.lower(): category for category in Category}
    categories: List[Category] = []
    for name in raw.split(","):
        name = name.strip().lower()
        if not name:
            continue
        if name not in by_name:
            raise ValueError(f"Unknown category in REQUIRED_CATEGORIES: {name}")
        categories.append(by_name[name])
    return categories


@dataclass
class Settings:
    database_url: Optional[str] = None
    database_name: Optional[str] = None
    port: int = 8000
    log_level: str = "INFO"
    json_logs: bool = False
    low_stock_threshold: int = 3
    required_categories: List[Category] = field(
        default_factory=lambda: parse_categories(DEFAULT_REQUIRED)
    )
    default_pricing: PricingConfig = field(default_factory=PricingConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL") or None,
            database_name=os.getenv("DATABASE_NAME") or None,
            port=int(os.getenv("PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            json_logs=_env_bool("JSON_LOGS", "false"),
            low_stock_threshold=int(os.getenv("LOW_STOCK_THRESHOLD", "3")),
            required_categories=parse_categories(os.getenv("REQUIRED_CATEGORIES", DEFAULT_REQUIRED)),
            default_pricing=PricingConfig(
                vat_enabled=_env_bool("DEFAULT_VAT_ENABLED", "true"),
                vat_percent=Decimal(os.getenv("DEFAULT_VAT_PERCENT", "7")),
                include_cost=_env_bool("DEFAULT_INCLUDE_COST", "true"),
            ),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
