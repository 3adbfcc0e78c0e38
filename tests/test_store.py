"""Fachada de colecciones sobre SQLAlchemy."""

from datetime import datetime, timedelta

import pytest

from app.core.errors import InvalidArgument, NotFound
from app.shared.database.models import Rider
from app.shared.database.store import Collection, commit, parse_object_id


@pytest.fixture()
def riders(db):
    return Collection(db, Rider, filter_fields=("status", "district"))


def _rider(**overrides):
    doc = {
        "name": "Rider",
        "email": "r@x.com",
        "district": "Dhaka",
        "status": "pending",
        "work_status": "available",
        "created_at": datetime.now(),
    }
    doc.update(overrides)
    return doc


class TestParseObjectId:
    @pytest.mark.parametrize("raw,expected", [("1", 1), (" 42 ", 42), (7, 7)])
    def test_valid_ids(self, raw, expected):
        assert parse_object_id(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "", None, "0", "-3", "1.5", 0, True, "64b7f0c2e1"])
    def test_malformed_ids(self, raw):
        with pytest.raises(InvalidArgument):
            parse_object_id(raw)


class TestCollection:
    def test_insert_returns_id(self, db, riders):
        rider_id = riders.insert(_rider())
        commit(db)
        assert riders.find_by_id(rider_id).email == "r@x.com"

    def test_find_filters_and_ignores_none(self, db, riders):
        riders.insert(_rider(email="a@x.com", district="Dhaka"))
        riders.insert(_rider(email="b@x.com", district="Sylhet"))
        commit(db)

        assert [r.email for r in riders.find({"district": "Sylhet"})] == ["b@x.com"]
        assert len(riders.find({"district": None, "status": "pending"})) == 2

    def test_find_sorts_newest_first(self, db, riders):
        base = datetime(2024, 1, 1)
        riders.insert(_rider(email="old@x.com", created_at=base))
        riders.insert(_rider(email="new@x.com", created_at=base + timedelta(days=1)))
        commit(db)

        assert [r.email for r in riders.find()] == ["new@x.com", "old@x.com"]
        assert [r.email for r in riders.find(descending=False)] == ["old@x.com", "new@x.com"]

    def test_undeclared_filter_is_rejected(self, riders):
        with pytest.raises(InvalidArgument):
            riders.find({"phone": "123"})

    def test_find_by_id(self, db, riders):
        with pytest.raises(InvalidArgument):
            riders.find_by_id("not-an-id")
        with pytest.raises(NotFound):
            riders.find_by_id("999")

    def test_update_and_delete_counts(self, db, riders):
        rider_id = riders.insert(_rider())
        commit(db)

        assert riders.update({"id": rider_id}, {"status": "active"}) == 1
        assert riders.update({"id": rider_id, "status": "pending"}, {"status": "rejected"}) == 0
        commit(db)
        assert riders.find_by_id(rider_id).status == "active"

        assert riders.delete({"id": rider_id}) == 1
        assert riders.delete({"id": rider_id}) == 0
