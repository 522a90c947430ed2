from decimal import Decimal, InvalidOperation

import click
from flask.cli import AppGroup

from classes.badge_types import BadgeCategory, BadgeTrigger
from models import db
from utils.badge_service import evaluate_badges, get_catalog, sync_badge_catalog

badges_cli = AppGroup("badges", help="Badge catalog and evaluation commands.")


def parse_fact(raw):
    """Parse ``name=value`` into a payload fact; booleans and numbers are converted."""
    if "=" not in raw:
        raise click.BadParameter(f"expected name=value, got {raw!r}")
    name, value = raw.split("=", 1)
    lowered = value.lower()
    if lowered in ("true", "yes"):
        return name, True
    if lowered in ("false", "no"):
        return name, False
    try:
        return name, Decimal(value)
    except InvalidOperation:
        return name, value


@badges_cli.command("sync")
def sync_command():
    """Write the badge catalog into the badges table."""
    counts = sync_badge_catalog()
    click.echo(
        f"Synced badge catalog: {counts['created']} created, "
        f"{counts['updated']} updated, {counts['deactivated']} deactivated"
    )


@badges_cli.command("list")
@click.option("--include-secret", is_flag=True, help="Show secret badges too.")
@click.option("--category", type=click.Choice([c.value for c in BadgeCategory]), default=None)
def list_command(include_secret, category):
    """List active badges in display order."""
    for definition in get_catalog().list_all(include_secret=include_secret, category=category):
        click.echo(
            f"{definition.code:<20} {definition.name:<20} "
            f"{definition.category.value:<10} {definition.rarity.label:<9} {definition.points:>4} pts"
        )


@badges_cli.command("evaluate")
@click.argument("child_id", type=int)
@click.argument("event", type=click.Choice([t.value for t in BadgeTrigger]))
@click.option("--fact", "facts", multiple=True, help="Event payload fact as name=value.")
def evaluate_command(child_id, event, facts):
    """Evaluate badges for CHILD_ID as if EVENT had just happened."""
    payload = dict(parse_fact(raw) for raw in facts)
    awards = evaluate_badges(child_id, event, payload)
    db.session.commit()
    if not awards:
        click.echo("No badges awarded.")
        return
    for award in awards:
        click.echo(f"Awarded {award.badge_code}: {award.earned_context}")
