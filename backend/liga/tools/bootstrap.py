"""
CLI to prepare a local database and issue access tokens.

Subcommands:
- init          create missing tables, the roles and the "create player" permission
- create-user   create a user with roles and print a freshly issued token
- issue-token   issue another token for an existing user

Coaches ("entrenador") get "create player" as a direct grant so the roster cap
can revoke it and deleting a player can give it back.

Output is a single JSON object on STDOUT.

Usage examples:
  python -m liga.tools.bootstrap init
  python -m liga.tools.bootstrap create-user --name Ana --email ana@example.com \
      --role entrenador --ability crear_equipo
  python -m liga.tools.bootstrap issue-token --email ana@example.com --ability editar_equipo_1
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional, Sequence

# Ensure the 'backend' directory is on sys.path so we can import liga modules
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, "..", ".."))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from liga.core.logging import init_logging  # noqa: E402
from liga.db.session import SessionLocal, init_db  # noqa: E402
from liga.models.user import (  # noqa: E402
    PERMISSION_CREATE_PLAYER,
    ROLE_ADMINISTRADOR,
    ROLE_ENTRENADOR,
)
from liga.repos.user_repo import SqlAlchemyUserRepo  # noqa: E402

KNOWN_ROLES = (ROLE_ADMINISTRADOR, ROLE_ENTRENADOR)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments.
    """
    parser = argparse.ArgumentParser(description="Bootstrap the Liga API database and access tokens.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Create tables, roles and permissions.")

    p_user = sub.add_parser("create-user", help="Create a user and issue a token.")
    p_user.add_argument("--name", required=True)
    p_user.add_argument("--email", required=True)
    p_user.add_argument("--role", action="append", choices=KNOWN_ROLES, default=[], help="Repeatable.")
    p_user.add_argument("--ability", action="append", default=[], help="Token ability, repeatable (default: *).")
    p_user.add_argument("--token-name", default="cli")

    p_token = sub.add_parser("issue-token", help="Issue a token for an existing user.")
    p_token.add_argument("--email", required=True)
    p_token.add_argument("--ability", action="append", default=[], help="Token ability, repeatable (default: *).")
    p_token.add_argument("--token-name", default="cli")

    return parser.parse_args(argv)


def _ensure_catalog(repo: SqlAlchemyUserRepo) -> None:
    repo.ensure_permission(PERMISSION_CREATE_PLAYER)
    for role in KNOWN_ROLES:
        repo.ensure_role(role)
    repo.session.commit()


def _abilities(values: List[str]) -> List[str]:
    return values or ["*"]


def cmd_init(repo: SqlAlchemyUserRepo, args: argparse.Namespace) -> dict:
    _ensure_catalog(repo)
    return {"roles": list(KNOWN_ROLES), "permissions": [PERMISSION_CREATE_PLAYER]}


def cmd_create_user(repo: SqlAlchemyUserRepo, args: argparse.Namespace) -> dict:
    _ensure_catalog(repo)
    user = repo.create_user(args.name, args.email, roles=args.role)
    if ROLE_ENTRENADOR in args.role:
        repo.grant_permission(user, PERMISSION_CREATE_PLAYER)
    token, plain = repo.create_token(user, name=args.token_name, abilities=_abilities(args.ability))
    return {
        "user_id": user.id,
        "email": user.email,
        "roles": sorted(r.name for r in user.roles),
        "token": plain,
        "abilities": token.abilities,
    }


def cmd_issue_token(repo: SqlAlchemyUserRepo, args: argparse.Namespace) -> dict:
    user = repo.get_by_email(args.email)
    if user is None:
        raise ValueError(f"user not found: {args.email}")
    token, plain = repo.create_token(user, name=args.token_name, abilities=_abilities(args.ability))
    return {"user_id": user.id, "token": plain, "abilities": token.abilities}


COMMANDS = {
    "init": cmd_init,
    "create-user": cmd_create_user,
    "issue-token": cmd_issue_token,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entrypoint for the CLI.

    Returns:
        Process exit code (0 for success, non-zero for error).
    """
    args = _parse_args(argv)
    init_logging()
    init_db()
    session = SessionLocal()
    try:
        result = COMMANDS[args.command](SqlAlchemyUserRepo(session), args)
        print(json.dumps(result, ensure_ascii=False))
        return 0
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        session.close()


if __name__ == "__main__":
    raise SystemExit(main())
