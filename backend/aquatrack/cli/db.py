"""Flask CLI commands for schema management and demo data."""

from __future__ import annotations

import logging
from datetime import datetime

import click
from flask import current_app
from flask.cli import with_appcontext

from aquatrack.core.extensions import db
from aquatrack.repositories.user import UserRepository
from aquatrack.services import AuthService, RegisterIn, WaterCreateIn, WaterService

LOGGER = logging.getLogger(__name__)

DEMO_EMAIL = "demo@aquatrack.dev"
DEMO_PASSWORD = "demo-password"
# (hour of day, millilitres) logged for today
DEMO_DRINKS = ((8, 250), (11, 300), (14, 500), (18, 250))


def _echo_summary(summary: dict[str, dict[str, int]]) -> None:
    """Pretty-print a tabular summary of seed results."""
    click.echo("Seed summary:")
    width = max(len(name) for name in summary)
    for table, counters in sorted(summary.items()):
        created = counters.get("created", 0)
        existing = counters.get("existing", 0)
        click.echo(f"  {table.ljust(width)}  created={created:>2}  existing={existing:>2}")


def _ensure_non_production(command: str) -> None:
    """Abort destructive commands when running in production."""
    if str(current_app.config.get("APP_ENV", "")).lower() == "production":
        raise click.UsageError(
            f"The 'flask db {command}' command is restricted to non-production environments."
        )


def seed_demo(
    *, email: str = DEMO_EMAIL, password: str = DEMO_PASSWORD
) -> dict[str, dict[str, int]]:
    """Create the demo account and today's drinks unless the account exists.

    :returns: ``{table: {"created": n, "existing": m}}`` counters.
    """
    existing = UserRepository().get_by_email(email)
    if existing is not None:
        LOGGER.info("seed.demo.exists", extra={"user_id": existing.id})
        return {
            "users": {"created": 0, "existing": 1},
            "water_records": {"created": 0, "existing": 0},
        }

    account = AuthService().register(
        RegisterIn(email=email, password=password, repeat_password=password, name="Demo")
    )
    water = WaterService()
    today = datetime.now().strftime("%Y-%m-%d")
    for hour, amount in DEMO_DRINKS:
        water.create(
            WaterCreateIn(owner_id=account.id, amount=amount, time=f"{today} {hour:02d}:00:00")
        )
    LOGGER.info("seed.demo.created", extra={"user_id": account.id})
    return {
        "users": {"created": 1, "existing": 0},
        "water_records": {"created": len(DEMO_DRINKS), "existing": 0},
    }


@click.group("db")
def db_cli() -> None:
    """Database schema and seed commands."""


@db_cli.command("create")
@with_appcontext
def create_command() -> None:
    """Create all tables that do not exist yet."""
    db.create_all()
    click.echo("Database tables created.")


@db_cli.command("drop")
@click.option("--yes", is_flag=True, help="Skip the destructive confirmation prompt.")
@with_appcontext
def drop_command(yes: bool) -> None:
    """Drop all application tables."""
    _ensure_non_production("drop")
    if not yes:
        click.confirm("This will DROP all application tables. Continue?", abort=True)
    LOGGER.info("Dropping database schema...")
    db.session.remove()
    db.drop_all()
    click.echo("Database tables dropped.")


@db_cli.command("seed-demo")
@click.option("--email", default=DEMO_EMAIL, show_default=True, help="Demo account email.")
@click.option("--password", default=DEMO_PASSWORD, help="Demo account password.")
@with_appcontext
def seed_demo_command(email: str, password: str) -> None:
    """Create a demo account with a few drinks logged for today."""
    try:
        summary = seed_demo(email=email, password=password)
    except Exception as exc:
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc
    _echo_summary(summary)
