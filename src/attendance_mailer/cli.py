"""Command-line interface for the attendance mailer.

Operator commands for inspecting the notification catalog, checking the mail
server and previewing or sending notifications using the settings stored in
the configured database.
"""

import asyncio
from typing import Awaitable, Callable, NoReturn, TypeVar

import click

from attendance_mailer.core.config import get_settings
from attendance_mailer.core.exceptions import NotificationError
from attendance_mailer.core.logging import LoggingContext, configure_logging, get_logger
from attendance_mailer.domain.entities.notification_type import list_notification_types
from attendance_mailer.infrastructure.persistence.database import DatabaseManager
from attendance_mailer.infrastructure.services.notification_dispatcher import (
    NotificationDispatcher,
)

T = TypeVar("T")


def _run_with_dispatcher(
    action: Callable[[NotificationDispatcher], Awaitable[T]], command: str
) -> T:
    settings = get_settings()
    configure_logging(settings)

    async def run() -> T:
        db = DatabaseManager()
        try:
            await db.create_tables()
            return await action(NotificationDispatcher.from_database(db))
        finally:
            await db.disconnect()

    with LoggingContext(command=command):
        return asyncio.run(run())


def _parse_variables(pairs: tuple[str, ...]) -> dict[str, str]:
    variables: dict[str, str] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise click.BadParameter(f"expected NAME=VALUE, got {pair!r}", param_hint="--var")
        variables[name.strip()] = value
    return variables


@click.group()
@click.version_option(version="0.1.0", prog_name="attendance-mailer")
def cli() -> None:
    """Attendance Mailer - notification templating and delivery."""


@cli.command("types")
def list_types() -> None:
    """List the notification types and their template variables."""
    for info in list_notification_types():
        click.echo(f"{info.type.value:<20} {info.name}")
        click.echo(f"{'':<20} key: {info.key}")
        click.echo(f"{'':<20} variables: {', '.join(info.variables)}")


@cli.command("test-connection")
def test_connection() -> None:
    """Check that the configured SMTP server accepts a login."""
    ok = _run_with_dispatcher(lambda dispatcher: dispatcher.test_connection(), "test-connection")
    if ok:
        click.echo("Email connection verified.")
        return
    click.echo("Email connection failed. See logs for details.", err=True)
    raise SystemExit(1)


@cli.command("send-test")
@click.argument("email")
def send_test(email: str) -> None:
    """Send a test attendance reminder to EMAIL."""
    logger = get_logger(__name__)
    try:
        _run_with_dispatcher(lambda dispatcher: dispatcher.send_test_email(email), "send-test")
    except NotificationError as e:
        logger.error("Test email failed", error=str(e))
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"Test email sent to {email}.")


@cli.command()
@click.argument("notification_type")
@click.option(
    "--var",
    "variables",
    multiple=True,
    help="Template variable as NAME=VALUE (repeatable)",
)
def preview(notification_type: str, variables: tuple[str, ...]) -> None:
    """Render NOTIFICATION_TYPE with stored settings without sending it."""
    parsed = _parse_variables(variables)
    try:
        rendered = _run_with_dispatcher(
            lambda dispatcher: dispatcher.render(notification_type, parsed), "preview"
        )
    except NotificationError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    click.echo(f"Subject: {rendered.subject}\n")
    click.echo(rendered.body)


def main() -> NoReturn:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
