"""
Command-line installer.

Usage:
    python -m exhibit.install --email admin@example.com --name Admin --password secret123
"""
import argparse
import logging
import os
import sys

from exhibit.db.database import SessionLocal
from exhibit.install.installer import Installer
from exhibit.services import ServiceManager

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Install the exhibit database and first user.")
    parser.add_argument("--email", required=True, help="Email of the first global administrator")
    parser.add_argument("--name", required=True, help="Display name of the first global administrator")
    parser.add_argument(
        "--password",
        default=os.getenv("EXHIBIT_INSTALL_PASSWORD"),
        help="Password (defaults to EXHIBIT_INSTALL_PASSWORD)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())

    db = SessionLocal()
    try:
        services = ServiceManager()
        services.set_service("EntityManager", db)
        installer = Installer(services)
        ok = installer.install({"email": args.email, "name": args.name, "password": args.password})
    finally:
        db.close()

    for message in installer.get_info():
        print(message)
    for message in installer.get_errors():
        print(f"ERROR: {message}", file=sys.stderr)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
