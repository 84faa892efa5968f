"""
Menu API CLI.

Command-line interface for database setup and catalog seeding.
"""

import sys

import typer
from rich.console import Console
from rich.table import Table

from shared.config.constants import CATEGORY_STRUCTURE, Roles
from shared.config.logging import setup_logging
from shared.utils.exceptions import AppException

app = typer.Typer(
    name="menu-api",
    help="Menu management CLI",
    add_completion=False,
)
console = Console()


@app.callback()
def main():
    setup_logging()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db():
    """Create all tables that do not exist yet."""
    from menu_api.models import Base
    from shared.infrastructure.db import engine

    Base.metadata.create_all(bind=engine)
    console.print("[green]✓ Database tables created/verified[/green]")


@app.command()
def create_admin(
    username: str = typer.Option(..., prompt=True, help="Login name"),
    email: str = typer.Option(..., prompt=True, help="Email address"),
    name: str = typer.Option("Administrator", help="Display name"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"
    ),
):
    """Create a dashboard administrator."""
    from menu_api.services.domain import AuthService
    from shared.infrastructure.db import get_db_context

    with get_db_context() as db:
        try:
            _, user = AuthService(db).register(
                name=name,
                username=username,
                email=email,
                password=password,
                role=Roles.ADMIN,
            )
        except AppException as e:
            console.print(f"[red]✗ {e.detail}[/red]")
            raise typer.Exit(1)

    console.print(f"[green]✓ Admin '{user.username}' created (id={user.id})[/green]")


# =============================================================================
# Catalog Commands
# =============================================================================

@app.command()
def seed_categories():
    """Create the standard FOOD and DRINKS categories that are missing."""
    from menu_api.services.domain import CategoryService
    from shared.infrastructure.db import get_db_context

    with get_db_context() as db:
        created = CategoryService(db).seed_structure(CATEGORY_STRUCTURE, actor="cli")

    if created:
        console.print(f"[green]✓ Created {created} categories[/green]")
    else:
        console.print("[yellow]All categories already exist[/yellow]")


@app.command()
def menu_structure():
    """Show category names per group in display order."""
    from menu_api.services.domain import CategoryService
    from shared.infrastructure.db import get_db_context

    with get_db_context() as db:
        structure = CategoryService(db).menu_structure()

    for group, names in structure.items():
        table = Table(title=group)
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Category", style="green")
        for position, name in enumerate(names, start=1):
            table.add_row(str(position), name)
        console.print(table)


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health():
    """Check database and Redis connectivity."""
    from menu_api.routers.public.health import check_database
    from shared.infrastructure.redis_pool import ping_redis
    from shared.utils.health import HealthStatus, run_health_check

    results = [
        run_health_check("database", check_database),
        run_health_check("redis", ping_redis),
    ]

    table = Table(title="Dependency Health")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    for result in results:
        status = (
            "✓ Healthy" if result.status == HealthStatus.HEALTHY
            else f"✗ {result.error or result.status.value}"
        )
        table.add_row(result.component, status, f"{result.latency_ms or 0:.0f}ms")

    console.print(table)
    if any(r.status != HealthStatus.HEALTHY for r in results):
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Menu API Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "1.0.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
