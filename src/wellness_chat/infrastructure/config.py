"""
infrastructure.config - Typed, injectable configuration.

A frozen dataclass that can be constructed from the environment (and an
optional .env file) or passed explicitly in tests.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Centralized configuration for the wellness chat tracker.

    Build one with from_env() for the CLI, or construct it explicitly
    in tests.
    """
    # Database
    db_path: str = "wellness.db"

    # Logging
    log_level: str = "INFO"

    # Number of recommendations shown in a chat reply
    digest_size: int = 3

    # Where the CLI remembers the selected user
    session_dir: Path = Path.home() / ".wellness-chat"

    @property
    def log_level_value(self) -> int:
        """Return the numeric logging level, falling back to INFO."""
        return getattr(logging, self.log_level.upper(), logging.INFO)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> Settings:
        """Build Settings from environment variables (and .env if present)."""
        from dotenv import load_dotenv
        load_dotenv(dotenv_path=env_file)

        return cls(
            db_path=os.getenv("WELLNESS_DB_PATH", "wellness.db"),
            log_level=os.getenv("WELLNESS_LOG_LEVEL", "INFO"),
            digest_size=int(os.getenv("WELLNESS_DIGEST_SIZE", "3")),
            session_dir=Path(
                os.getenv("WELLNESS_SESSION_DIR", str(Path.home() / ".wellness-chat"))
            ).expanduser(),
        )
