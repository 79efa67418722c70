#!/usr/bin/env python3
"""
Schema migration runner for the Supabase storage backend.

Applies the SQL files in migrations/ in name order and records each one,
with a checksum, in a tracking table.

Usage:
    python run_migrations.py              # Apply pending migrations
    python run_migrations.py --status     # Show migration status
    python run_migrations.py --dry-run    # List what would be applied

Configuration:
    COOKBOOK_SUPABASE_DB_URL=postgresql://postgres.[ref]:[password]@[host]:6543/postgres
"""

import argparse
import hashlib
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

import psycopg2
from psycopg2 import sql
from rich.console import Console
from rich.table import Table

from shared.config import get_settings

console = Console()

MIGRATIONS_DIR = Path(__file__).parent / "migrations"
MIGRATIONS_TABLE = "_migrations"


@dataclass(frozen=True)
class Migration:
    name: str
    path: Path
    checksum: str


@dataclass(frozen=True)
class AppliedMigration:
    checksum: str
    applied_at: Optional[datetime]


def checksum_of(content: str) -> str:
    return hashlib.sha256(content.encode()).hexdigest()[:16]


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[Migration]:
    """SQL files in the directory, sorted by name."""
    if not directory.exists():
        return []
    return [
        Migration(name=path.name, path=path, checksum=checksum_of(path.read_text()))
        for path in sorted(directory.glob("*.sql"))
    ]


def plan_migrations(
    available: list[Migration],
    applied: dict[str, AppliedMigration],
) -> tuple[list[Migration], list[str]]:
    """
    Split available migrations into pending ones and changed ones.

    Returns:
        (pending, changed) where changed names were applied with a
        different checksum; they are reported, never re-run.
    """
    pending: list[Migration] = []
    changed: list[str] = []
    for migration in available:
        record = applied.get(migration.name)
        if record is None:
            pending.append(migration)
        elif record.checksum != migration.checksum:
            changed.append(migration.name)
    return pending, changed


# -------------------------------------------------------------------------
# Database access
# -------------------------------------------------------------------------


def connect():
    db_url = get_settings().supabase_db_url
    if not db_url:
        console.print("[red]Error:[/red] COOKBOOK_SUPABASE_DB_URL is not set.")
        sys.exit(1)
    try:
        return psycopg2.connect(db_url)
    except psycopg2.Error as e:
        console.print(f"[red]Database connection failed:[/red] {e}")
        sys.exit(1)


def ensure_tracking_table(conn) -> None:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL(
                """
                CREATE TABLE IF NOT EXISTS {} (
                    id SERIAL PRIMARY KEY,
                    name VARCHAR(255) NOT NULL UNIQUE,
                    checksum VARCHAR(64) NOT NULL,
                    applied_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
                )
                """
            ).format(sql.Identifier(MIGRATIONS_TABLE))
        )
    conn.commit()


def fetch_applied(conn) -> dict[str, AppliedMigration]:
    with conn.cursor() as cur:
        cur.execute(
            sql.SQL("SELECT name, checksum, applied_at FROM {} ORDER BY name").format(
                sql.Identifier(MIGRATIONS_TABLE)
            )
        )
        return {
            name: AppliedMigration(checksum=checksum, applied_at=applied_at)
            for name, checksum, applied_at in cur.fetchall()
        }


def apply_migration(conn, migration: Migration) -> None:
    """Run one migration and record it in the same transaction."""
    console.print(f"[blue]Applying:[/blue] {migration.name}...")
    try:
        with conn.cursor() as cur:
            cur.execute(migration.path.read_text())
            cur.execute(
                sql.SQL("INSERT INTO {} (name, checksum) VALUES (%s, %s)").format(
                    sql.Identifier(MIGRATIONS_TABLE)
                ),
                (migration.name, migration.checksum),
            )
        conn.commit()
    except psycopg2.Error as e:
        conn.rollback()
        console.print(f"[red]Failed:[/red] {migration.name}: {e}")
        raise
    console.print(f"[green]Applied:[/green] {migration.name}")


def status_table(
    available: list[Migration],
    applied: dict[str, AppliedMigration],
) -> Table:
    table = Table(title="Migration Status")
    table.add_column("Migration", style="cyan")
    table.add_column("Status")
    table.add_column("Applied At")
    table.add_column("Checksum")

    pending, changed = plan_migrations(available, applied)
    pending_names = {migration.name for migration in pending}
    for migration in available:
        record = applied.get(migration.name)
        if migration.name in pending_names:
            status = "[yellow]Pending[/yellow]"
        elif migration.name in changed:
            status = "[red]Changed[/red]"
        else:
            status = "[green]Applied[/green]"
        applied_at = record.applied_at.strftime("%Y-%m-%d %H:%M:%S") if record and record.applied_at else ""
        table.add_row(migration.name, status, applied_at, migration.checksum)
    return table


def main():
    parser = argparse.ArgumentParser(description="Apply Cookbook schema migrations")
    parser.add_argument("--status", action="store_true", help="Show status without applying")
    parser.add_argument("--dry-run", action="store_true", help="List pending migrations only")
    args = parser.parse_args()

    available = discover_migrations()
    conn = connect()
    try:
        ensure_tracking_table(conn)
        applied = fetch_applied(conn)

        if args.status:
            console.print(status_table(available, applied))
            return

        pending, changed = plan_migrations(available, applied)
        for name in changed:
            console.print(f"[yellow]Warning:[/yellow] {name} changed after it was applied")

        if not pending:
            console.print("[green]Schema is up to date.[/green]")
            return

        for migration in pending:
            if args.dry_run:
                console.print(f"[cyan]Would apply:[/cyan] {migration.name}")
            else:
                apply_migration(conn, migration)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
