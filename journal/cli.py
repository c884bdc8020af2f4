"""CLI tool for account administration.

Usage:
    python -m journal.cli create-user
    python -m journal.cli deactivate-user <username>
    python -m journal.cli delete-user <username>
"""

import sys
import getpass

from sqlmodel import Session, select

from journal.database import get_engine, create_db_and_tables
from journal.models.user import User
from journal.services.auth import hash_password, generate_totp_secret, get_totp_uri
from journal.services.screenshots import delete_screenshot


def create_user():
    """Create a journal user with TOTP setup."""
    create_db_and_tables()

    username = input("Username: ").strip()
    if not username:
        print("Username cannot be empty.")
        sys.exit(1)

    with Session(get_engine()) as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            print(f"User '{username}' already exists.")
            sys.exit(1)

    password = getpass.getpass("Password: ")
    password_confirm = getpass.getpass("Confirm password: ")
    if password != password_confirm:
        print("Passwords do not match.")
        sys.exit(1)

    totp_secret = generate_totp_secret()
    totp_uri = get_totp_uri(totp_secret, username)

    user = User(
        username=username,
        hashed_password=hash_password(password),
        totp_secret=totp_secret,
    )

    with Session(get_engine()) as session:
        session.add(user)
        session.commit()

    print(f"\nUser '{username}' created successfully.")
    print(f"\nTOTP Secret: {totp_secret}")
    print(f"TOTP URI: {totp_uri}")
    print("\nScan the QR code below with your authenticator app:")

    try:
        import qrcode
        qr = qrcode.QRCode(box_size=1, border=1)
        qr.add_data(totp_uri)
        qr.make(fit=True)
        qr.print_ascii(invert=True)
    except ImportError:
        print("(Install qrcode to display QR code in terminal)")


def deactivate_user(username: str):
    """Block a user from logging in; their trades are kept."""
    create_db_and_tables()

    with Session(get_engine()) as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user is None:
            print(f"User '{username}' not found.")
            sys.exit(1)
        user.is_active = False
        session.add(user)
        session.commit()

    print(f"User '{username}' deactivated.")


def delete_user(username: str):
    """Remove a user, their trades and their stored screenshots."""
    create_db_and_tables()

    with Session(get_engine()) as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user is None:
            print(f"User '{username}' not found.")
            sys.exit(1)
        screenshots = [t.screenshot_url for t in user.trades if t.screenshot_url]
        trade_count = len(user.trades)
        session.delete(user)
        session.commit()

    for url in screenshots:
        try:
            delete_screenshot(url)
        except OSError as e:
            print(f"Could not delete screenshot {url}: {e}")

    print(f"User '{username}' deleted with {trade_count} trades.")


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m journal.cli <command>")
        print("Commands: create-user, deactivate-user <username>, delete-user <username>")
        sys.exit(1)

    command = sys.argv[1]
    if command == "create-user":
        create_user()
    elif command == "deactivate-user" and len(sys.argv) == 3:
        deactivate_user(sys.argv[2])
    elif command == "delete-user" and len(sys.argv) == 3:
        delete_user(sys.argv[2])
    else:
        print(f"Unknown command: {' '.join(sys.argv[1:])}")
        sys.exit(1)


if __name__ == "__main__":
    main()
