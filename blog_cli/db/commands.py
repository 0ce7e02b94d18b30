import typer

from blog_api.core.database import build_engine
from blog_api.core.errors import FatalMigrationError
from blog_api.core.logging import configure_logging
from blog_api.core.migrate import MigrationRunner, MigrationState
from blog_api.core.settings import settings


app = typer.Typer(help="Database commands (migrate)")


@app.command("migrate")
def migrate(
    database_url: str = typer.Option(None, "--database-url", help="Defaults to DATABASE_URL"),
    migrations_dir: str = typer.Option(None, "--dir", help="Defaults to MIGRATIONS_DIR"),
):
    """
    Apply pending schema migrations in version order.
    """
    configure_logging(settings.LOG_LEVEL)
    engine = build_engine(database_url or settings.DATABASE_URL)
    runner = MigrationRunner(engine, migrations_dir or settings.MIGRATIONS_DIR)
    try:
        migrations = runner.run()
    except FatalMigrationError as exc:
        typer.echo(f"Migration failed: {exc}", err=True)
        raise typer.Exit(code=1)
    finally:
        engine.dispose()

    applied = [m for m in migrations if m.state is MigrationState.APPLIED]
    skipped = [m for m in migrations if m.state is MigrationState.SKIPPED]
    for migration in applied:
        typer.echo(f"applied  {migration.filename}")
    for migration in skipped:
        typer.echo(f"skipped  {migration.filename}")
    typer.echo(f"{len(applied)} applied, {len(skipped)} already up to date.")
