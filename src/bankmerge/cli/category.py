#!/usr/bin/env python3
"""
Category CLI - Category List Administration
"""

import click

from ..core.config import get_config
from ..core.errors import DuplicateRecordError, NotFoundError
from ..core.models import Category
from ..enrichment import EnrichmentStore


def _store() -> EnrichmentStore:
    return EnrichmentStore.from_config(get_config())


@click.group(invoke_without_command=True)
@click.pass_context
def category(ctx: click.Context) -> None:
    """Category administration commands (lists categories when run without a subcommand)."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_categories)


@category.command("list")
def list_categories() -> None:
    """List all categories."""
    categories = _store().load_categories()
    if not categories:
        click.echo("No categories defined")
        return

    for item in categories:
        if item.synonyms:
            click.echo(f"{item.name} (synonyms: {', '.join(item.synonyms)})")
        else:
            click.echo(item.name)


@category.command("add")
@click.option("--name", required=True, help="Canonical category name")
@click.option("--synonym", "synonyms", multiple=True, help="Alternative spelling (repeatable)")
def add_category(name: str, synonyms: tuple[str, ...]) -> None:
    """Add a category."""
    new_category = Category(name=name.strip())
    for synonym in synonyms:
        new_category = new_category.with_synonym(synonym)

    try:
        _store().add_category(new_category)
    except DuplicateRecordError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"✅ Added category '{new_category.name}'")


@category.command("remove")
@click.option("--name", required=True, help="Category name")
def remove_category(name: str) -> None:
    """Remove a category."""
    try:
        removed = _store().remove_category(name)
    except NotFoundError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"✅ Removed category '{removed.name}'")


@category.command("synonym")
@click.option("--name", required=True, help="Category name")
@click.option("--synonym", required=True, help="Synonym to add")
def add_category_synonym(name: str, synonym: str) -> None:
    """Add a synonym to a category."""
    try:
        added = _store().add_category_synonym(name, synonym)
    except NotFoundError as e:
        raise click.ClickException(str(e)) from e

    if added:
        click.echo(f"✅ Added synonym '{synonym}' to category '{name}'")
    else:
        click.echo(f"Synonym '{synonym}' already exists for category '{name}'")
