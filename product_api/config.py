# product_api/config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional


def _split_csv(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass
class Settings:
    """Application settings read from environment variables.

    Values are computed when the dataclass is instantiated, so set the
    environment before importing this module (or build a fresh
    ``Settings()`` in tests).
    """

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Product Management API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    db_path: str = field(default_factory=lambda: os.getenv("DB_PATH", "db.json"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "4000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: Optional[str] = field(default_factory=lambda: os.getenv("LOG_FILE") or None)
    access_log: bool = field(default_factory=lambda: os.getenv("ACCESS_LOG", "true").lower() in {"1", "true", "yes"})
    id_length: int = field(default_factory=lambda: int(os.getenv("ID_LENGTH", "5")))
    cors_origins: List[str] = field(default_factory=lambda: _split_csv(os.getenv("CORS_ORIGINS", "*")))
    static_dir: str = field(default_factory=lambda: os.getenv("STATIC_DIR", "build"))
    json_indent: int = field(default_factory=lambda: int(os.getenv("JSON_INDENT", "2")))


settings = Settings()
