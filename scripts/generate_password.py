"""Generate the hash for AUTH_PASSWORD_HASH.

Usage: python scripts/generate_password.py
"""

from __future__ import annotations

import getpass
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.attendance_dashboard.attendance_dashboard.auth.service import hash_password
from src.attendance_dashboard.attendance_dashboard.core.exceptions import ValidationError


def main() -> None:
    print("Password hash generator: the output goes into AUTH_PASSWORD_HASH in your .env file.")
    password = getpass.getpass("Enter your desired password: ")
    try:
        password_hash = hash_password(password)
    except ValidationError as e:
        raise SystemExit(f"Error: {e}")

    print("\nCopy this line to your .env file:\n")
    print(f"AUTH_PASSWORD_HASH={password_hash}\n")


if __name__ == "__main__":
    main()
