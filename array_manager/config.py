import os

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Runtime settings for the playground app."""

    HOST: str = "127.0.0.1"
    PORT: int = Field(default=7860, ge=1, le=65535)
    PREVIEW_LIMIT: int = Field(default=20, ge=1)
    LOG_LEVEL: str = "INFO"

    @classmethod
    def load(cls) -> "Settings":
        values = {}
        for field in ("HOST", "PORT", "PREVIEW_LIMIT"):
            raw = os.getenv(f"ARRAY_MANAGER_{field}")
            if raw is not None and raw.strip():
                values[field] = raw.strip()
        log_level = os.getenv("LOG_LEVEL")
        if log_level:
            values["LOG_LEVEL"] = log_level.upper()
        return cls(**values)
