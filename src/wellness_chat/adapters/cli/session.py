"""
adapters.cli.session - Remembers which user the CLI is acting for.

The selected user is stored in <session_dir>/session.json (by default
~/.wellness-chat/session.json) so that every command does not need a
--user option.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path

SESSION_FILENAME = "session.json"


@dataclass
class Session:
    user_id: int
    name: str = ""


def load_session(session_dir: Path) -> Session | None:
    """Return the stored session, or None if no user is selected."""
    session_file = session_dir / SESSION_FILENAME
    if not session_file.exists():
        return None
    try:
        data = json.loads(session_file.read_text(encoding="utf-8"))
        return Session(**data)
    except (OSError, ValueError, TypeError):
        return None


def save_session(session_dir: Path, session: Session) -> None:
    session_dir.mkdir(parents=True, exist_ok=True)
    (session_dir / SESSION_FILENAME).write_text(
        json.dumps(asdict(session), indent=2), encoding="utf-8"
    )

