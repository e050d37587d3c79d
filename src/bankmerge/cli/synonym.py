#!/usr/bin/env python3
"""
Synonym CLI - add a synonym to a payee or a category in one command.
"""

import click

from ..core.config import get_config
from ..core.errors import NotFoundError
from ..enrichment import EnrichmentStore


@click.command()
@click.option(
    "--type",
    "record_type",
    type=click.Choice(["payee", "category"], case_sensitive=False),
    required=True,
    help="Kind of record to extend",
)
@click.option("--name", required=True, help="Payee or category name")
@click.option("--synonym", "synonym_value", required=True, help="Synonym to add")
def synonym(record_type: str, name: str, synonym_value: str) -> None:
    """
    Add a synonym to a payee or category.

    Examples:
      bankmerge synonym --type payee --name "Yandex Go" --synonym "YANDEX*GO"
      bankmerge synonym --type category --name Groceries --synonym Supermarkets
    """
    store = EnrichmentStore.from_config(get_config())
    kind = record_type.lower()

    try:
        if kind == "payee":
            added = store.add_payee_synonym(name, synonym_value)
        else:
            added = store.add_category_synonym(name, synonym_value)
    except NotFoundError as e:
        raise click.ClickException(str(e)) from e

    if added:
        click.echo(f"✅ Added synonym '{synonym_value}' to {kind} '{name}'")
    else:
        click.echo(f"Synonym '{synonym_value}' already exists for {kind} '{name}'")
