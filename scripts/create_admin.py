#!/usr/bin/env python3
"""
Create an admin account, or promote an existing user to admin.

Registration through the API always creates regular users, so the first
admin has to be created from the command line.

Usage:
    python scripts/create_admin.py alice alice@example.com
    python scripts/create_admin.py alice alice@example.com --password s3cret
    python scripts/create_admin.py alice --promote
"""

import argparse
import getpass
import logging
import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from evently.auth import hash_password
from evently.db import Database
from evently.models import User, UserRole

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

def create_admin(database: Database, username: str, email: str, password: str) -> int:
    """Insert a new admin user and return its id."""
    with database.session() as session:
        existing = session.query(User).filter(
            (User.username == username) | (User.email == email)
        ).first()
        if existing:
            raise ValueError(f"User {existing.username} ({existing.email}) already exists; use --promote")
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(password),
            role=UserRole.ADMIN.value,
        )
        session.add(user)
        session.flush()
        return user.user_id

def promote(database: Database, username: str) -> int:
    """Give an existing user the admin role and return its id."""
    with database.session() as session:
        user = session.query(User).filter(User.username == username).first()
        if not user:
            raise ValueError(f"No user named {username}")
        user.role = UserRole.ADMIN.value
        return user.user_id

def main() -> int:
    parser = argparse.ArgumentParser(description="Create or promote an Evently admin account")
    parser.add_argument('username')
    parser.add_argument('email', nargs='?')
    parser.add_argument('--password', help="Password for a new account (prompted when omitted)")
    parser.add_argument('--promote', action='store_true', help="Promote an existing user instead")
    args = parser.parse_args()

    database = Database()
    try:
        database.init_db()
        if args.promote:
            user_id = promote(database, args.username)
            logger.info(f"Promoted {args.username} (user {user_id}) to admin")
        else:
            if not args.email:
                parser.error("email is required when creating an account")
            password = args.password or getpass.getpass("Password: ")
            user_id = create_admin(database, args.username, args.email, password)
            logger.info(f"Created admin {args.username} (user {user_id})")
    except ValueError as e:
        logger.error(str(e))
        return 1
    finally:
        database.dispose()
    return 0

if __name__ == "__main__":
    sys.exit(main())
