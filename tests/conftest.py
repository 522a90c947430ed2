"""Pytest configuration for the achievement engine tests."""
from decimal import Decimal

import pytest
from sqlalchemy import event

from app import create_app
from models import db, Child
from utils.badge_service import sync_badge_catalog


def enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def foreign_keys():
    """SQLite leaves FK enforcement off; override with True to get MySQL-like behaviour."""
    return False


@pytest.fixture
def app(foreign_keys):
    """App bound to a fresh in-memory database with the catalog synced."""
    app = create_app("testing")
    with app.app_context():
        if foreign_keys:
            event.listen(db.engine, "connect", enable_foreign_keys)
        db.create_all()
        sync_badge_catalog()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def catalog(app):
    return app.extensions["badge_catalog"]


@pytest.fixture
def make_child(app):
    def _make_child(name="Alice", **measures):
        child = Child(name=name, **measures)
        db.session.add(child)
        db.session.commit()
        return child
    return _make_child


@pytest.fixture
def child(make_child):
    return make_child(total_saved=Decimal("0"), current_balance=Decimal("0"))
