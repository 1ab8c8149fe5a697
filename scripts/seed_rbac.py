#!/usr/bin/env python3
"""Seed roles and permissions, and optionally grant a role to a user.

Safe to run repeatedly: missing permissions are created and the seeded
roles are reset to their default permission sets.

Usage:
    python scripts/seed_rbac.py
    python scripts/seed_rbac.py --email admin@example.com --role admin
    python scripts/seed_rbac.py --email admin@example.com --password secret123 --role admin
"""

import argparse
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from backoffice.database import Base, SessionLocal, engine
from backoffice.services.auth import create_user, get_user_by_email
from backoffice.services.rbac import ROLE_PERMISSIONS, assign_role, seed_rbac


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--email", help="user to grant the role to")
    parser.add_argument("--password", help="create the user with this password if missing")
    parser.add_argument("--role", default="admin", choices=sorted(ROLE_PERMISSIONS))
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    try:
        print("Seeding permissions and roles...")
        roles = seed_rbac(session)
        for name, role in roles.items():
            print(f"  {name}: {len(role.permissions)} permissions")

        if args.email:
            user = get_user_by_email(session, args.email)
            if user is None:
                if not args.password:
                    sys.exit(f"User {args.email} does not exist; pass --password to create it")
                user = create_user(session, args.email, args.password)
                print(f"Created user {args.email}")
            assign_role(session, user, args.role)
            print(f"Granted role '{args.role}' to {args.email}")

        print("RBAC seeded successfully!")

    except Exception as e:
        session.rollback()
        print(f"Error seeding RBAC: {e}")
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
