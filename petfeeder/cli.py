"""CLI entry point for pet feeder backend management commands."""

import sys

import click

from petfeeder import create_app
from petfeeder.database import (
    check_db_connection,
    get_current_revision,
    get_pending_migrations,
    upgrade_database,
)


@click.group()
def cli() -> None:
    """Pet feeder CLI - Database and maintenance commands."""
    pass


@cli.command()
@click.option("--recreate", is_flag=True, help="Drop all tables before upgrading")
@click.option(
    "--yes-i-am-sure",
    is_flag=True,
    help="Required safety flag when using --recreate",
)
def upgrade_db(recreate: bool, yes_i_am_sure: bool) -> None:
    """Upgrade database to latest migration.

    Applies all pending Alembic migrations to bring the database schema up to date.
    The first migrations seed the default settings and the admin account.

    Examples:
        petfeeder-cli upgrade-db                              Apply pending migrations
        petfeeder-cli upgrade-db --recreate --yes-i-am-sure   Drop all tables and recreate
    """
    if recreate and not yes_i_am_sure:
        click.echo(
            "Error: --recreate requires --yes-i-am-sure flag for safety", err=True
        )
        click.echo(
            "   This will DROP ALL TABLES and recreate from migrations!", err=True
        )
        sys.exit(1)

    app = create_app()

    with app.app_context():
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

        click.echo(f"Using database: {app.config['SQLALCHEMY_DATABASE_URI']}")

        if recreate:
            click.echo("WARNING: About to drop all tables and recreate from migrations!")
            click.echo("   This will permanently delete all data in the database.")

        pending = get_pending_migrations()
        if not pending and not recreate:
            click.echo("Database is already up to date")
            return

        if pending:
            click.echo(f"Found {len(pending)} pending migration(s)")

        try:
            applied = upgrade_database(recreate=recreate)
            if applied:
                click.echo(f"Applied {len(applied)} migration(s):")
                for rev, desc in applied:
                    click.echo(f"  - {rev}: {desc}")
            click.echo("Database upgrade complete")
        except Exception as e:
            click.echo(f"Error during database upgrade: {e}", err=True)
            sys.exit(1)


@cli.command()
def db_status() -> None:
    """Show database migration status.

    Displays current database revision and any pending migrations.
    """
    app = create_app()

    with app.app_context():
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

        current = get_current_revision()
        pending = get_pending_migrations()

        if current:
            click.echo(f"Current revision: {current}")
        else:
            click.echo("No migrations applied yet")

        if pending:
            click.echo(f"Pending migrations: {len(pending)}")
            for rev in pending:
                click.echo(f"  - {rev}")
        else:
            click.echo("No pending migrations")


@cli.command()
@click.option(
    "--yes-i-am-sure",
    is_flag=True,
    help="Required safety flag to confirm the reset",
)
def factory_reset(yes_i_am_sure: bool) -> None:
    """Wipe schedules, history and alerts and restore default settings.

    Also resets the admin password to its default.

    Examples:
        petfeeder-cli factory-reset --yes-i-am-sure
    """
    if not yes_i_am_sure:
        click.echo("Error: --yes-i-am-sure flag is required for safety", err=True)
        click.echo("   This will DELETE all schedules, history and alerts!", err=True)
        sys.exit(1)

    app = create_app()

    with app.app_context():
        if not check_db_connection():
            click.echo("Error: Cannot connect to database", err=True)
            sys.exit(1)

        session = app.container.db_session()
        try:
            app.container.maintenance_service().factory_reset()
            session.commit()
            click.echo("Factory reset complete")
        except Exception as e:
            session.rollback()
            click.echo(f"Error during factory reset: {e}", err=True)
            sys.exit(1)
        finally:
            session.close()
            app.container.db_session.reset()


def main() -> None:
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
