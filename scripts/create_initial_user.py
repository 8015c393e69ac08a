"""Utility script to create a user and print an access token for it."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from isle.application.use_cases.users.create_user import create_user
from isle.domain.entities import Role
from isle.domain.exceptions import IsleError
from isle.infrastructure.database import SessionLocal, initialize_database
from isle.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a user for the Isle API and print a bearer token.",
    )
    parser.add_argument("--username", default="admin", help="Username (default: admin)")
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address (default: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password. Prompted interactively when omitted.",
    )
    parser.add_argument(
        "--admin",
        action="store_true",
        help="Create the user with the admin role.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            username=args.username,
            email=args.email,
            password=password,
            role=Role.ADMIN if args.admin else Role.USER,
        )
    except (IsleError, ValueError) as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Username: {user.username}\n"
            f"  Email: {user.email}\n"
            f"  Token: {create_access_token(user.id)}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
