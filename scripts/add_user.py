#!/usr/bin/env python3
"""
Create an account (buyer, merchant or admin) directly in the database.

Usage:
  python scripts/add_user.py --email admin@example.com --name Admin --role admin [--password secret] [--avatar URL]
"""
from __future__ import annotations

import argparse
import secrets
import sys

from shiptrack.core.security import hash_password
from shiptrack.db.create_tables import create_all
from shiptrack.domain.roles import UserRole
from shiptrack.repositories.user_repository import UserRepository


def gen_password(length: int = 16) -> str:
    return secrets.token_urlsafe(length)[:length]


def main() -> None:
    ap = argparse.ArgumentParser(description="Create an account")
    ap.add_argument("--email", required=True, help="Account e-mail (must be unused)")
    ap.add_argument("--name", default="", help="Display name")
    ap.add_argument("--role", default=UserRole.BUYER.value, choices=[r.value for r in UserRole])
    ap.add_argument("--password", help="Password (default: random)")
    ap.add_argument("--avatar", help="Avatar URL")
    args = ap.parse_args()

    create_all()
    repo = UserRepository()
    email = (args.email or "").strip()
    if "@" not in email:
        raise SystemExit("Invalid e-mail")
    if repo.get_user_by_email(email):
        raise SystemExit(f"E-mail '{email}' is already registered")

    password = (args.password or "").strip() or gen_password()
    user = repo.create_user(
        args.role,
        name=args.name or email.split("@", 1)[0],
        email=email,
        password_hash=hash_password(password),
        avatar=args.avatar,
    )
    print("OK: account created")
    print(f"  ID: {user.id}")
    print(f"  E-mail: {user.email}")
    print(f"  Role: {user.role}")
    if not args.password:
        print(f"  Password: {password}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI usage
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
