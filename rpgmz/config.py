"""Runtime settings, read from the environment (and a repo-level .env)."""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv(Path(__file__).parent.parent / ".env")


class Settings(BaseModel):
    project: Path | None = None  # opened at startup when set
    log_level: str = "INFO"


def get_settings() -> Settings:
    project = os.getenv("RPGMZ_PROJECT", "")
    return Settings(
        project=Path(project) if project else None,
        log_level=os.getenv("RPGMZ_LOG_LEVEL", "INFO").upper(),
    )
