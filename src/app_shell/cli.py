import argparse
import getpass
import json
import logging
import os
import secrets
import sys
from pathlib import Path

from src.app_shell.config import is_installed
from src.app_shell.context import create_install_ports
from src.components.install import InstallInput, run_install
from src.rules.loader import load_rules

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")

RULES_FILE = "install.yaml"

# CLI option -> install form field
FORM_OPTIONS = {
    "name": "name",
    "email": "email",
    "username": "username",
    "password": "password",
    "driver": "driver",
    "db_host": "db-host",
    "db_port": "db-port",
    "db_database": "db-database",
    "db_user": "db-user",
    "db_password": "db-password",
    "db_prefix": "db-prefix",
}


def build_form(args: argparse.Namespace) -> dict[str, str]:
    form = {}
    for option, field in FORM_OPTIONS.items():
        value = getattr(args, option, None)
        if value is not None:
            form[field] = value
    return form


def handle_install(args: argparse.Namespace) -> int:
    root = Path(args.root)
    if args.password is None:
        args.password = getpass.getpass("Owner password: ")

    secret_key = os.environ.get("FERN_SECRET_KEY")
    if not secret_key:
        logger.warning("FERN_SECRET_KEY is not set; the session token is single-use.")
        secret_key = secrets.token_hex(32)

    try:
        rules = load_rules(root / RULES_FILE)
    except ValueError as e:
        logger.error(str(e))
        return 1

    outcome = run_install(
        InstallInput.from_form(build_form(args)),
        create_install_ports(root, secret_key),
        base_url=args.base_url,
        rules=rules,
    )
    print(json.dumps(outcome.to_response(), indent=2))
    return 0 if outcome.success else 1


def handle_status(args: argparse.Namespace) -> int:
    installed = is_installed(Path(args.root))
    print(json.dumps({"installed": installed}))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fernpress CLI")
    parser.add_argument(
        "--root",
        default=os.environ.get("FERN_ROOT", os.getcwd()),
        help="Deployment root directory",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # install
    install_parser = subparsers.add_parser("install", help="Install a blank deployment")
    install_parser.add_argument("--name", required=True, help="Owner display name")
    install_parser.add_argument("--email", required=True, help="Owner email")
    install_parser.add_argument("--username", required=True, help="Owner username")
    install_parser.add_argument("--password", help="Owner password (prompted if omitted)")
    install_parser.add_argument("--driver", help="Store driver (sqlite, pgsql)")
    install_parser.add_argument("--db-host")
    install_parser.add_argument("--db-port")
    install_parser.add_argument("--db-database", required=True)
    install_parser.add_argument("--db-user", required=True)
    install_parser.add_argument("--db-password", default="")
    install_parser.add_argument("--db-prefix")
    install_parser.add_argument(
        "--base-url",
        default=os.environ.get("FERN_BASE_URL", ""),
        help="Public URL used for the post-install redirect",
    )

    # status
    subparsers.add_parser("status", help="Show whether the deployment is installed")

    args = parser.parse_args(argv)

    if args.command == "install":
        return handle_install(args)
    return handle_status(args)


if __name__ == "__main__":
    sys.exit(main())
