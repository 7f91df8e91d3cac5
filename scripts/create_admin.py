"""
Create (or promote) an admin account. Admins bypass the subscription and verification
checks and can moderate users and reviews.

Run from project root:
  python scripts/create_admin.py admin@camrent.cm 'S3cret-pass'

An existing user with that email is promoted; the password is left unchanged.
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from camrent.database import SessionLocal
from camrent.models.user import User, UserRole
from camrent.services.accounts import normalize_email
from camrent.services.auth import get_password_hash


def main():
    parser = argparse.ArgumentParser(description="Create or promote a Camrent admin")
    parser.add_argument("email")
    parser.add_argument("password", nargs="?", help="required when the account does not exist yet")
    parser.add_argument("--first-name", default="Admin")
    args = parser.parse_args()

    email = normalize_email(args.email)
    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == email).first()
        if user:
            user.is_admin = True
            user.is_verified = True
            db.commit()
            print(f"Promoted existing user {email} (id={user.id}) to admin.")
            return
        if not args.password or len(args.password) < 8:
            parser.error("a password of at least 8 characters is required for a new account")
        user = User(
            email=email,
            hashed_password=get_password_hash(args.password),
            role=UserRole.landlord,
            first_name=args.first_name,
            is_verified=True,
            is_admin=True,
        )
        db.add(user)
        db.commit()
        print(f"Created admin {email} (id={user.id}).")
    finally:
        db.close()


if __name__ == "__main__":
    main()
