"""Generate a random SECRET_KEY for signing session cookies."""

from __future__ import annotations

import secrets


def main() -> None:
    print("Copy this line to your .env file:\n")
    print(f"SECRET_KEY={secrets.token_hex(32)}\n")


if __name__ == "__main__":
    main()
