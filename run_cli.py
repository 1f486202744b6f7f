"""
Run the Wellness Chat CLI without installing the package.

Usage:
    python run_cli.py [COMMAND] [OPTIONS]

Commands:
    init             Create the database tables
    register         Create a profile and select it
    use              Select an existing profile by id
    whoami           Show the selected profile
    profile          Show (or update) the selected profile
    say              Send one chat message and print the reply
    chat             Interactive chat session
    recommend        Generate fresh recommendations
    recommendations  List stored recommendations
    mark-read        Mark a recommendation as read
    history          Show everything recorded on one day
    messages         Show the chat history

Examples:
    python run_cli.py register --name Ana --email ana@example.com
    python run_cli.py say "I slept for 7 hours and I'm feeling great"
    python run_cli.py chat

Environment variables (all optional, also read from .env):
    WELLNESS_DB_PATH      SQLite database file path (default: wellness.db)
    WELLNESS_LOG_LEVEL    Logging level (default: INFO)
    WELLNESS_DIGEST_SIZE  Recommendations shown in a chat reply (default: 3)
    WELLNESS_SESSION_DIR  Where the selected user is remembered (default: ~/.wellness-chat)
"""

import sys
from pathlib import Path

# Ensure src/ is importable
sys.path.insert(0, str(Path(__file__).parent / "src"))

from wellness_chat.adapters.cli.main import app

if __name__ == "__main__":
    app()
