"""
Ordered, apply-once SQL schema migrations.

Migration units are ``<number>_<name>.sql`` files in a directory. They are
applied in ascending numeric order, each inside its own transaction, and
every successful unit is recorded in ``schema_migrations`` in that same
transaction. A unit that is already recorded is skipped, so running the
runner twice against the same database is a no-op.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .errors import FatalMigrationError
from ..models.SchemaMigration import SchemaMigration

logger = logging.getLogger(__name__)

MIGRATION_PATTERN = re.compile(r"^(\d+)_.+\.sql$")


class MigrationState(str, Enum):
    DISCOVERED = "discovered"
    SKIPPED = "skipped"
    APPLYING = "applying"
    APPLIED = "applied"
    FAILED = "failed"


@dataclass
class Migration:
    version: int
    filename: str
    path: Path
    state: MigrationState = field(default=MigrationState.DISCOVERED)

    @property
    def name(self) -> str:
        return self.filename.split("_", 1)[1][: -len(".sql")]

    def read_statements(self) -> list[str]:
        return split_sql_statements(self.path.read_text(encoding="utf-8"))


def discover_migrations(directory: str | Path) -> list[Migration]:
    """
    List migration units in ascending version order.

    Files not matching ``<number>_<name>.sql`` are ignored. Units sharing a
    version number keep file name order.
    """
    directory = Path(directory)
    names = sorted(
        entry.name
        for entry in directory.iterdir()
        if entry.is_file() and MIGRATION_PATTERN.match(entry.name)
    )
    migrations = [
        Migration(
            version=int(MIGRATION_PATTERN.match(name).group(1)),
            filename=name,
            path=directory / name,
        )
        for name in names
    ]
    migrations.sort(key=lambda m: m.version)
    return migrations


def split_sql_statements(content: str) -> list[str]:
    """
    Split a SQL script into statements on ``;``.

    A ``;`` inside a single or double quoted string, a ``--`` line comment
    or a ``/* */`` block comment does not end a statement. Comments are
    dropped from the output. A quote preceded by a backslash does not close
    the string.
    """
    statements = []
    current: list[str] = []
    quote = None
    i = 0
    length = len(content)

    def flush():
        statement = "".join(current).strip()
        if statement:
            statements.append(statement)
        current.clear()

    while i < length:
        char = content[i]

        if quote is not None:
            current.append(char)
            if char == quote and content[i - 1] != "\\":
                quote = None
            i += 1
            continue

        if content.startswith("--", i):
            end = content.find("\n", i)
            # keep the newline so tokens on both sides stay apart
            i = length if end == -1 else end
            continue

        if content.startswith("/*", i):
            end = content.find("*/", i + 2)
            i = length if end == -1 else end + 2
            current.append(" ")
            continue

        if char == ";":
            flush()
        else:
            if char in ("'", '"'):
                quote = char
            current.append(char)
        i += 1

    flush()
    return statements


class MigrationRunner:
    """Apply pending migration units from ``directory`` to ``engine``."""

    def __init__(self, engine: Engine, directory: str | Path):
        self.engine = engine
        self.directory = Path(directory)

    def run(self) -> list[Migration]:
        """
        Apply every pending unit in order.

        Returns the discovered units with their final state. Raises
        FatalMigrationError on the first unit that cannot be applied; units
        committed before it stay applied and later units are not attempted.
        """
        logger.info("Looking for migrations in: %s", self.directory)
        try:
            migrations = discover_migrations(self.directory)
        except OSError as exc:
            raise FatalMigrationError(
                str(self.directory), f"failed to read migrations directory: {exc}"
            ) from exc

        self._ensure_table()

        for migration in migrations:
            logger.info("Processing migration: %s", migration.filename)
            if self._is_applied(migration.filename):
                migration.state = MigrationState.SKIPPED
                logger.info("Migration %s already applied, skipping", migration.filename)
                continue
            self._apply(migration)
            logger.info("Successfully applied migration: %s", migration.filename)

        return migrations

    def _ensure_table(self) -> None:
        try:
            with self.engine.begin() as conn:
                SchemaMigration.__table__.create(conn, checkfirst=True)
        except SQLAlchemyError as exc:
            raise FatalMigrationError(
                SchemaMigration.__tablename__, f"failed to create table: {exc}"
            ) from exc

    def _is_applied(self, version: str) -> bool:
        statement = select(SchemaMigration.version).where(SchemaMigration.version == version)
        try:
            with self.engine.connect() as conn:
                return conn.execute(statement).first() is not None
        except SQLAlchemyError as exc:
            raise FatalMigrationError(version, f"failed to check migration status: {exc}") from exc

    def _apply(self, migration: Migration) -> None:
        try:
            statements = migration.read_statements()
        except OSError as exc:
            migration.state = MigrationState.FAILED
            raise FatalMigrationError(migration.filename, f"failed to read file: {exc}") from exc

        migration.state = MigrationState.APPLYING
        try:
            # engine.begin() commits on success and rolls back on any error
            with self.engine.begin() as conn:
                for statement in statements:
                    conn.exec_driver_sql(statement)
                conn.execute(
                    insert(SchemaMigration.__table__).values(
                        version=migration.filename,
                        applied_at=datetime.now(timezone.utc),
                    )
                )
        except SQLAlchemyError as exc:
            migration.state = MigrationState.FAILED
            raise FatalMigrationError(migration.filename, str(exc)) from exc

        migration.state = MigrationState.APPLIED
