"""Tests for the ``flask badges`` command group."""
from decimal import Decimal

import click
import pytest

from manage import parse_fact
from models import db
from utils.badge_service import get_child_points


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


def test_list_hides_secret_badges(runner):
    result = runner.invoke(args=["badges", "list"])
    assert result.exit_code == 0
    assert "PENNY_PINCHER" in result.output
    assert "BIRTHDAY_BONUS" not in result.output

    result = runner.invoke(args=["badges", "list", "--include-secret", "--category", "Special"])
    assert "BIRTHDAY_BONUS" in result.output
    assert "PENNY_PINCHER" not in result.output


def test_sync(runner):
    result = runner.invoke(args=["badges", "sync"])
    assert result.exit_code == 0
    assert "0 created, 35 updated, 0 deactivated" in result.output


def test_evaluate_awards_badge(runner, child):
    child_id = child.id
    db.session.commit()

    result = runner.invoke(
        args=["badges", "evaluate", str(child_id), "savings_deposit", "--fact", "first_savings_deposit=true"]
    )

    assert result.exit_code == 0, result.output
    assert "Awarded FIRST_SAVER" in result.output
    db.session.expire_all()
    assert get_child_points(child_id)["total_points"] == 10

    result = runner.invoke(
        args=["badges", "evaluate", str(child_id), "savings_deposit", "--fact", "first_savings_deposit=true"]
    )
    assert "No badges awarded." in result.output


def test_evaluate_rejects_unknown_event(runner, child):
    result = runner.invoke(args=["badges", "evaluate", str(child.id), "moon_landing"])
    assert result.exit_code != 0


@pytest.mark.parametrize("raw, expected", [
    ("first_savings_deposit=true", ("first_savings_deposit", True)),
    ("birthday_gift=No", ("birthday_gift", False)),
    ("total_saved=12.50", ("total_saved", Decimal("12.50"))),
    ("allowance_date=2026-10-17", ("allowance_date", "2026-10-17")),
])
def test_parse_fact(raw, expected):
    assert parse_fact(raw) == expected


def test_parse_fact_requires_equals_sign():
    with pytest.raises(click.BadParameter):
        parse_fact("first_savings_deposit")
