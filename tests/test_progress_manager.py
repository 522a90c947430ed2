"""Tests for per-badge progress records."""
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from classes.progress_manager import ProgressManager
from models import db, Badge
from models.badge_progress import ChildBadgeProgress


class TestUpsert:

    def test_creates_record(self, child):
        progress = ProgressManager.upsert(child.id, "PENNY_PINCHER", Decimal("6"), Decimal("10"))
        db.session.commit()

        stored = ProgressManager.get(child.id, "PENNY_PINCHER")
        assert stored.id == progress.id
        assert stored.current_progress == Decimal("6")
        assert stored.target_progress == Decimal("10")
        assert stored.percentage == 60.0

    def test_same_value_leaves_record_untouched(self, child):
        first = ProgressManager.upsert(child.id, "PENNY_PINCHER", 6, 10)
        db.session.commit()
        updated_at = first.updated_at

        second = ProgressManager.upsert(child.id, "PENNY_PINCHER", 6, 10)
        db.session.commit()

        assert second.id == first.id
        assert second.updated_at == updated_at
        assert ChildBadgeProgress.query.filter_by(child_id=child.id).count() == 1

    def test_lower_value_overwrites(self, child):
        ProgressManager.upsert(child.id, "MONEY_STACKER", 30, 50)
        ProgressManager.upsert(child.id, "MONEY_STACKER", 12, 50)
        db.session.commit()

        assert ProgressManager.get(child.id, "MONEY_STACKER").current_progress == Decimal("12")

    def test_fractional_measure_replay_leaves_record_untouched(self, child):
        ProgressManager.upsert(child.id, "SUPER_SAVER", Decimal("33.333"), 50)
        db.session.commit()
        db.session.expire_all()
        updated_at = ProgressManager.get(child.id, "SUPER_SAVER").updated_at

        ProgressManager.upsert(child.id, "SUPER_SAVER", Decimal("33.333"), 50)
        db.session.commit()
        db.session.expire_all()

        progress = ProgressManager.get(child.id, "SUPER_SAVER")
        assert progress.current_progress == Decimal("33.33")
        assert progress.target_progress == Decimal("50")
        assert progress.updated_at == updated_at

    def test_to_dict(self, child):
        ProgressManager.upsert(child.id, "PENNY_PINCHER", Decimal("2.5"), 10)
        db.session.commit()

        data = ProgressManager.get(child.id, "PENNY_PINCHER").to_dict()
        assert data["badge_name"] == "Penny Pincher"
        assert data["current_progress"] == 2.5
        assert data["target_progress"] == 10.0
        assert data["percentage"] == 25.0


class TestClearAndList:

    def test_clear(self, child):
        ProgressManager.upsert(child.id, "PENNY_PINCHER", 6, 10)
        db.session.commit()

        assert ProgressManager.clear(child.id, "PENNY_PINCHER") is True
        assert ProgressManager.get(child.id, "PENNY_PINCHER") is None
        assert ProgressManager.clear(child.id, "PENNY_PINCHER") is False

    def test_list_in_progress_orders_by_completion(self, child):
        ProgressManager.upsert(child.id, "MONEY_STACKER", 10, 50)
        ProgressManager.upsert(child.id, "PENNY_PINCHER", 8, 10)
        ProgressManager.upsert(child.id, "SAVINGS_STAR", 10, 100)
        db.session.commit()

        codes = [p.badge_code for p in ProgressManager.list_in_progress(child.id)]
        assert codes == ["PENNY_PINCHER", "MONEY_STACKER", "SAVINGS_STAR"]


class TestForeignKeys:

    @pytest.fixture
    def foreign_keys(self):
        return True

    def test_missing_badge_row_raises_instead_of_retrying(self, child):
        db.session.delete(db.session.get(Badge, "PENNY_PINCHER"))
        db.session.commit()

        with pytest.raises(IntegrityError):
            ProgressManager.upsert(child.id, "PENNY_PINCHER", 6, 10)
        db.session.rollback()

        assert ChildBadgeProgress.query.count() == 0
