"""
Tests for the SQLAlchemy vessel repository adapter.

Runs against an in-memory SQLite database; the snapshot test uses a
file-backed one so a second connection can write concurrently.
Validates aggregate persistence, filtering, paging, the conditional
version update and cascading deletes.
"""

from decimal import Decimal

from sqlalchemy import event, func, select

from fleet.domain.vessel.entities import VesselChanges
from fleet.domain.vessel.predicate_builder import VesselFilter
from fleet.infrastructure.vessel.tables import cargo_box_table, officer_table
from fleet.infrastructure.vessel.vessel_repository import (
    VesselRepositoryAdapter,
    _escape_like,
    where_conditions,
)


def _count_rows(engine, table) -> int:
    with engine.connect() as conn:
        return conn.execute(select(func.count()).select_from(table)).scalar_one()


class TestCreateAndFind:
    """Tests for create and find_by_id."""

    def test_create_assigns_id_and_version_zero(self, repository, make_vessel) -> None:
        vessel = repository.create(make_vessel())
        assert vessel.id > 0
        assert vessel.version == 0

    def test_find_by_id_loads_the_aggregate(self, repository, make_vessel) -> None:
        created = repository.create(
            make_vessel(boxes=(("2", "4", "2"), ("1.5", "3", "1")))
        )

        vessel = repository.find_by_id(created.id)

        assert vessel is not None
        assert vessel.name == "Festung"
        assert vessel.length == Decimal("200")
        assert vessel.version == 0
        assert vessel.officer.name == "Turm"
        assert vessel.officer.age == 45
        assert [box.height for box in vessel.cargo_boxes] == [
            Decimal("2"),
            Decimal("1.5"),
        ]
        assert vessel.created_at is not None
        assert vessel.updated_at is not None

    def test_vessel_without_cargo_boxes(self, repository, make_vessel) -> None:
        created = repository.create(make_vessel(officer_age=None, boxes=()))
        vessel = repository.find_by_id(created.id)
        assert vessel.cargo_boxes == ()
        assert vessel.officer.age is None

    def test_find_by_id_unknown(self, repository) -> None:
        assert repository.find_by_id(999) is None


class TestFindPageAndCount:
    """Tests for find_page and count with filters."""

    def test_filters_by_name_case_insensitive(self, repository, make_vessel) -> None:
        repository.create(make_vessel(name="Rusalka"))
        repository.create(make_vessel(name="Festung"))

        result, total = repository.find_page(
            VesselFilter(name_contains="rUS"), skip=0, take=10
        )

        assert [v.name for v in result] == ["Rusalka"]
        assert total == 1

    def test_like_wildcards_match_literally(self, repository, make_vessel) -> None:
        repository.create(make_vessel(name="Alpha"))
        repository.create(make_vessel(name="100%_sicher"))

        result, _ = repository.find_page(VesselFilter(name_contains="%"), skip=0, take=10)

        assert [v.name for v in result] == ["100%_sicher"]

    def test_length_is_inclusive_lower_bound(self, repository, make_vessel) -> None:
        repository.create(make_vessel(name="Short", length="150"))
        repository.create(make_vessel(name="Exact", length="170"))
        repository.create(make_vessel(name="Long", length="300"))

        result, total = repository.find_page(
            VesselFilter(min_length=Decimal("170")), skip=0, take=10
        )

        assert [v.name for v in result] == ["Exact", "Long"]
        assert total == 2
        assert repository.count(VesselFilter(min_length=Decimal("170"))) == 2

    def test_window_in_identity_order(self, repository, make_vessel) -> None:
        ids = [repository.create(make_vessel(name=f"V{i}")).id for i in range(7)]

        page, total = repository.find_page(None, skip=3, take=3)

        assert [v.id for v in page] == ids[3:6]
        assert total == 7
        assert repository.find_page(None, skip=6, take=3)[0][0].id == ids[6]
        assert repository.find_page(None, skip=9, take=3) == ([], 7)

    def test_count_without_filter(self, repository, make_vessel) -> None:
        assert repository.count() == 0
        repository.create(make_vessel())
        repository.create(make_vessel())
        assert repository.count() == 2
        assert repository.count(VesselFilter()) == 2


class TestFindPageSnapshot:
    """find_page reads window and total from one snapshot."""

    def test_delete_between_window_and_total_is_not_seen(
        self, file_engine, make_vessel
    ) -> None:
        repository = VesselRepositoryAdapter(engine=file_engine)
        ids = [repository.create(make_vessel(name=f"V{i}")).id for i in range(3)]
        deleted: list[int] = []

        @event.listens_for(file_engine, "before_cursor_execute")
        def _delete_before_count(
            conn, cursor, statement, parameters, context, executemany
        ) -> None:
            if not deleted and "count(*)" in statement.lower():
                deleted.extend(ids[:2])
                for vessel_id in ids[:2]:
                    repository.delete(vessel_id)

        vessels, total = repository.find_page(None, skip=0, take=3)

        assert deleted == ids[:2]
        assert [v.id for v in vessels] == ids
        assert all(v.officer.name == "Turm" for v in vessels)
        assert total == len(vessels) == 3
        assert repository.count() == 1


class TestWhereConditions:
    """Tests for rendering a VesselFilter as SQL conditions."""

    def test_empty_filter_adds_no_condition(self) -> None:
        assert where_conditions(VesselFilter()) == []
        assert where_conditions(None) == []

    def test_each_criterion_adds_one_condition(self) -> None:
        conditions = where_conditions(
            VesselFilter(name_contains="a", min_length=Decimal("5"))
        )
        assert len(conditions) == 2


class TestConditionalUpdate:
    """Tests for the version-checked update."""

    def test_matching_version_increments(self, repository, make_vessel) -> None:
        vessel = repository.create(make_vessel())

        new_version = repository.update(
            vessel.id, VesselChanges(length=Decimal("170")), expected_version=0
        )

        stored = repository.find_by_id(vessel.id)
        assert new_version == 1
        assert stored.version == 1
        assert stored.length == Decimal("170")
        assert stored.name == "Festung"

    def test_stale_version_changes_nothing(self, repository, make_vessel) -> None:
        vessel = repository.create(make_vessel())
        repository.update(vessel.id, VesselChanges(name="Neu"), expected_version=0)

        result = repository.update(
            vessel.id, VesselChanges(name="Alt"), expected_version=0
        )

        stored = repository.find_by_id(vessel.id)
        assert result is None
        assert stored.version == 1
        assert stored.name == "Neu"

    def test_unknown_id(self, repository) -> None:
        assert repository.update(42, VesselChanges(name="X"), expected_version=0) is None


class TestDelete:
    """Tests for cascading delete."""

    def test_delete_removes_officer_and_boxes(
        self, engine, repository, make_vessel
    ) -> None:
        keep = repository.create(make_vessel(name="Keep"))
        gone = repository.create(make_vessel(name="Gone", boxes=(("1", "1", "1"),) * 3))

        assert repository.delete(gone.id) is True

        assert repository.find_by_id(gone.id) is None
        assert repository.find_by_id(keep.id) is not None
        assert _count_rows(engine, officer_table) == 1
        assert _count_rows(engine, cargo_box_table) == 1

    def test_delete_absent(self, repository) -> None:
        assert repository.delete(60) is False

    def test_ids_are_not_reused(self, repository, make_vessel) -> None:
        first = repository.create(make_vessel())
        repository.delete(first.id)
        second = repository.create(make_vessel())
        assert second.id > first.id


class TestEscapeLike:
    """Tests for LIKE escaping."""

    def test_escapes_wildcards_and_escape_char(self) -> None:
        assert _escape_like("a%b_c\\d") == "a\\%b\\_c\\\\d"

    def test_plain_text_unchanged(self) -> None:
        assert _escape_like("Rusalka") == "Rusalka"
