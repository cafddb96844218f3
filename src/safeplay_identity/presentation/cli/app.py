"""SafePlay CLI application using Typer.

Administrative commands for the SafePlay user store: schema creation,
registering users, existence checks and credential verification.
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncIterator, Awaitable, Callable, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from safeplay_config import get_settings
from safeplay_identity.application.services import UserService
from safeplay_identity.domain.user import (
    InvalidDisplayNameError,
    InvalidUsernameError,
    User,
    UsernameAlreadyExistsError,
    UserRole,
)
from safeplay_identity.exceptions import AuthError
from safeplay_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
    create_tables,
    dispose_engine,
    session_scope,
)
from safeplay_identity.services import PasswordHashingService

T = TypeVar("T")

app = typer.Typer(
    name="safeplay",
    help="SafePlay - user store administration CLI",
    no_args_is_help=True,
)
console = Console()

db_app = typer.Typer(
    name="db",
    help="Database schema utilities",
    no_args_is_help=True,
)
users_app = typer.Typer(
    name="users",
    help="User account management",
    no_args_is_help=True,
)
app.add_typer(db_app)
app.add_typer(users_app)


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    - Console output with timestamps and module names
    - Configurable log level for safeplay modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )

    logging.getLogger("safeplay_identity").setLevel(log_level)
    logging.getLogger("safeplay_config").setLevel(log_level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@app.callback()
def main() -> None:
    """SafePlay user store administration."""
    _configure_logging()


@asynccontextmanager
async def _user_service() -> AsyncIterator[UserService]:
    async with session_scope() as session:
        yield UserService(
            user_repository=UserRepositorySQLAlchemy(session),
            password_service=PasswordHashingService.from_settings(get_settings()),
        )


def _run(operation: Callable[[], Awaitable[T]]) -> T:
    async def _runner() -> T:
        try:
            return await operation()
        finally:
            await dispose_engine()

    return asyncio.run(_runner())


@db_app.command("init")
def db_init() -> None:
    """Create all database tables (idempotent)."""
    _run(create_tables)
    console.print("[green]Database schema is up to date.[/green]")


@users_app.command("create")
def create_user(
    username: str = typer.Argument(..., help="Login name (primary key)"),
    display_name: str = typer.Option(..., "--display-name", "-n", help="Shown name"),
    role: UserRole = typer.Option(UserRole.PLAYER, "--role", "-r"),
) -> None:
    """Register a new user. The password is prompted for."""
    password = typer.prompt("Password", hide_input=True, confirmation_prompt=True)

    async def _create() -> User:
        async with _user_service() as service:
            return await service.register_user(
                username=username,
                display_name=display_name,
                password=password,
                role=role,
            )

    try:
        user = _run(_create)
    except (
        AuthError,
        InvalidDisplayNameError,
        InvalidUsernameError,
        UsernameAlreadyExistsError,
    ) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    console.print(
        f"[green]Created[/green] {user.username} "
        f"([cyan]{user.display_name}[/cyan], {user.role.value})"
    )


@users_app.command("exists")
def user_exists(username: str = typer.Argument(...)) -> None:
    """Exit with 0 if the user exists, 1 otherwise."""

    async def _exists() -> bool:
        async with _user_service() as service:
            return await service.user_exists(username)

    if _run(_exists):
        console.print(f"[green]{username} exists[/green]")
        return
    console.print(f"[yellow]{username} does not exist[/yellow]")
    raise typer.Exit(1)


@users_app.command("verify")
def verify_user(username: str = typer.Argument(...)) -> None:
    """Check a password for USERNAME. Exit with 0 if valid, 1 otherwise."""
    password = typer.prompt("Password", hide_input=True)

    async def _verify() -> User | None:
        async with _user_service() as service:
            return await service.validate_user(username, password)

    user = _run(_verify)
    if user is None:
        console.print("[red]invalid[/red]")
        raise typer.Exit(1)
    console.print(f"[green]valid[/green] ({user.display_name})")


@users_app.command("list")
def list_users() -> None:
    """List all users, oldest first."""

    async def _list() -> list[User]:
        async with session_scope() as session:
            return await UserRepositorySQLAlchemy(session).list_all()

    users = _run(_list)

    table = Table(title="SafePlay users")
    table.add_column("Username", style="cyan")
    table.add_column("Display name")
    table.add_column("Role")
    table.add_column("Created")
    for user in users:
        table.add_row(
            user.username,
            user.display_name,
            user.role.value,
            user.created_at.strftime("%Y-%m-%d %H:%M"),
        )
    console.print(table)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
