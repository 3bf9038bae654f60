# scripts/setup/create_user.py
"""
Create a user from the command line (first operator, service accounts).
The password is asked interactively unless --password is given.
Usage: python scripts/setup/create_user.py --name Admin --email admin@empresa.es [--type admin] [--code E001]
"""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

import argparse
import getpass

from app.database import SessionLocal, create_tables
from app.schemas.user import UserCreate
from app.services import users_service


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create an access control user")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="Prompted when omitted")
    parser.add_argument("--type", default="user", help="user | admin")
    parser.add_argument("--code", dest="codigo_empleado", help="Employee code (turnstiles, departures)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    password = args.password or getpass.getpass("Password: ")
    if not password:
        print("Password cannot be empty")
        return 1

    create_tables()
    db = SessionLocal()
    try:
        if users_service.find_by_email(db, args.email) is not None:
            print(f"User with email {args.email} already exists")
            return 1
        user = users_service.create_user(db, UserCreate(
            name=args.name,
            email=args.email,
            password=password,
            type=args.type,
            codigo_empleado=args.codigo_empleado,
        ))
        print(f"Created user {user.id} <{user.email}> ({user.type})")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
