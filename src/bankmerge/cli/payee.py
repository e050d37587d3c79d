#!/usr/bin/env python3
"""
Payee CLI - Payee List Administration

Manages the payees used to rename and categorize converted transactions.
"""

import click

from ..core.config import get_config
from ..core.errors import DuplicateRecordError, NotFoundError
from ..core.models import Payee
from ..enrichment import EnrichmentStore


def _store() -> EnrichmentStore:
    return EnrichmentStore.from_config(get_config())


def echo_payee(payee: Payee) -> None:
    click.echo(payee.name)
    if payee.expense_category or payee.expense_description:
        click.echo(f"  Expense: {payee.expense_category or '-'} / {payee.expense_description or '-'}")
    if payee.top_up_category or payee.top_up_description:
        click.echo(f"  Top-up: {payee.top_up_category or '-'} / {payee.top_up_description or '-'}")
    if payee.synonyms:
        click.echo(f"  Synonyms: {', '.join(payee.synonyms)}")


@click.group(invoke_without_command=True)
@click.pass_context
def payee(ctx: click.Context) -> None:
    """Payee administration commands (lists payees when run without a subcommand)."""
    if ctx.invoked_subcommand is None:
        ctx.invoke(list_payees)


@payee.command("list")
def list_payees() -> None:
    """List all payees."""
    payees = _store().load_payees()
    if not payees:
        click.echo("No payees defined")
        return

    for item in payees:
        echo_payee(item)


@payee.command("add")
@click.option("--name", required=True, help="Canonical payee name")
@click.option("--expense-category", help="Category applied to expenses")
@click.option("--expense-description", help="Description applied to expenses")
@click.option("--topup-category", "top_up_category", help="Category applied to top-ups")
@click.option("--topup-description", "top_up_description", help="Description applied to top-ups")
@click.option("--synonym", "synonyms", multiple=True, help="Alternative spelling (repeatable)")
def add_payee(
    name: str,
    expense_category: str | None,
    expense_description: str | None,
    top_up_category: str | None,
    top_up_description: str | None,
    synonyms: tuple[str, ...],
) -> None:
    """
    Add a payee.

    Examples:
      bankmerge payee add --name "Yandex Go" --expense-category Transport --synonym "YANDEX.GO"
    """
    new_payee = Payee(
        name=name.strip(),
        expense_category=expense_category,
        expense_description=expense_description,
        top_up_category=top_up_category,
        top_up_description=top_up_description,
    )
    for synonym in synonyms:
        new_payee = new_payee.with_synonym(synonym)

    try:
        _store().add_payee(new_payee)
    except DuplicateRecordError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"✅ Added payee '{new_payee.name}'")


@payee.command("remove")
@click.option("--name", required=True, help="Payee name")
def remove_payee(name: str) -> None:
    """Remove a payee."""
    try:
        removed = _store().remove_payee(name)
    except NotFoundError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"✅ Removed payee '{removed.name}'")


@payee.command("synonym")
@click.option("--name", required=True, help="Payee name")
@click.option("--synonym", required=True, help="Synonym to add")
def add_payee_synonym(name: str, synonym: str) -> None:
    """Add a synonym to a payee."""
    try:
        added = _store().add_payee_synonym(name, synonym)
    except NotFoundError as e:
        raise click.ClickException(str(e)) from e

    if added:
        click.echo(f"✅ Added synonym '{synonym}' to payee '{name}'")
    else:
        click.echo(f"Synonym '{synonym}' already exists for payee '{name}'")
