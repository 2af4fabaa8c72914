#!/usr/bin/env python3
# =============================================================================
# scripts/init_db.py - Database Bootstrap
# =============================================================================
# Creates the users table if it doesn't exist and checks connectivity.
# Exits with status 1 if the database can't be initialized.
#
# Usage:
#   python scripts/init_db.py
#
# Prerequisites:
#   - Environment variables must be set (.env file)
# =============================================================================

import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

from app.config import get_settings
from app.exceptions import DatabaseInitError
from lib.database import init_database


def main() -> int:
    """Bootstrap the schema and report the result."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration:\n{e}", file=sys.stderr)
        return 1

    try:
        engine = init_database(settings)
    except DatabaseInitError as e:
        print(f"{e.message}\nSuggestion: {e.suggestion}", file=sys.stderr)
        return 1

    engine.dispose()
    print("Database initialized.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
