#!/usr/bin/env python3
"""Delete a user together with their tracks, environments and section config.

Stored audio files are left in the blob store.

Usage:
    python scripts/delete_user.py <username>
"""

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sanctum.database import SessionLocal
from sanctum.services.users import delete_user, get_user_by_username


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("username")
    args = parser.parse_args()

    session = SessionLocal()
    try:
        user = get_user_by_username(session, args.username)
        if user is None:
            print(f"No user named {args.username!r}")
            return 1
        delete_user(session, user.id)
        print(f"Deleted user {user.username} ({user.id})")
        return 0
    finally:
        session.close()


if __name__ == "__main__":
    sys.exit(main())
