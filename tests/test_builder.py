"""
Tests for the life history builder.

Uses a fixed clock and sequential ids so the whole structure is deterministic.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from lifehistory.builder import MAX_AGE, initiate, month_range
from lifehistory.clock import fixed_clock, sequential_ids
from lifehistory.core.events import EventBus, NoticeTypes
from lifehistory.models import EventKind, is_text_event, iter_months

BUILD_TIME = datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc)


@pytest.fixture
def build():
    """Builder with a fixed clock and fresh sequential ids per call."""

    def _build(birth_date, **kwargs):
        return initiate(
            birth_date,
            clock=fixed_clock(BUILD_TIME),
            id_factory=sequential_ids(),
            **kwargs,
        )

    return _build


def months_of(life_history):
    return [(loc.year.year, loc.month.month) for loc in iter_months(life_history)]


class TestEmptyInput:
    """Test the empty-state policy."""

    def test_none_returns_empty(self):
        """No birth date means no structure."""
        assert initiate(None) == ()

    def test_default_argument_returns_empty(self):
        assert initiate() == ()

    def test_empty_string_returns_empty(self):
        assert initiate("") == ()


class TestBoundaries:
    """Test first and last months of the lifespan."""

    def test_june_birth(self, build):
        """2000-06-15 runs from 2000-06 through 2080-05."""
        months = months_of(build("2000-06-15"))

        assert months[0] == (2000, 6)
        assert months[-1] == (2080, 5)
        assert len(months) == 960

    def test_december_birth(self, build):
        months = months_of(build("1999-12-31"))

        assert months[0] == (1999, 12)
        assert months[-1] == (2079, 11)
        assert len(months) == 960

    def test_january_birth_final_year_runs_through_december(self, build):
        """Birth month 1 wraps the final month to December instead of an empty year."""
        months = months_of(build("1990-01-10"))

        assert months[0] == (1990, 1)
        assert months[-1] == (2070, 12)
        assert len(months) == 81 * 12

    @pytest.mark.parametrize("birth_month", range(2, 13))
    def test_month_count_for_non_january_births(self, build, birth_month):
        """Lifespan holds 80 * 12 months for every birth month after January."""
        months = months_of(build(date(1985, birth_month, 1)))

        assert len(months) == MAX_AGE * 12
        assert months[0] == (1985, birth_month)
        assert months[-1] == (1985 + MAX_AGE, birth_month - 1)

    @pytest.mark.parametrize("birth_date", ["1950-01-01", "1987-04-30", "2003-11-02"])
    def test_months_are_contiguous(self, build, birth_date):
        """No gaps and strictly ascending order."""
        months = months_of(build(birth_date))

        for (year_a, month_a), (year_b, month_b) in zip(months, months[1:]):
            if month_a == 12:
                assert (year_b, month_b) == (year_a + 1, 1)
            else:
                assert (year_b, month_b) == (year_a, month_a + 1)

    def test_custom_max_age(self, build):
        months = months_of(build("2000-06-15", max_age=10))

        assert months[0] == (2000, 6)
        assert months[-1] == (2010, 5)
        assert len(months) == 10 * 12


class TestDecadesAndYears:
    """Test decade and year nodes."""

    def test_decade_ids_use_absolute_decade(self, build):
        life_history = build("2000-06-15")

        assert [d.id for d in life_history] == [f"decade-{n}" for n in range(200, 209)]

    def test_decade_numbers_are_sequential(self, build):
        life_history = build("1995-03-01")

        assert [d.decade for d in life_history] == list(range(1, len(life_history) + 1))
        assert life_history[0].id == "decade-199"

    def test_partial_first_and_last_decade(self, build):
        life_history = build("1995-03-01")

        assert [y.year for y in life_history[0].years] == list(range(1995, 2000))
        assert [y.year for y in life_history[-1].years] == [2070, 2071, 2072, 2073, 2074, 2075]

    def test_year_ids(self, build):
        life_history = build("2000-06-15")

        year = life_history[0].years[0]
        assert year.id == "year-2000"
        assert year.year == 2000
        assert [m.month for m in year.months] == list(range(6, 13))

    def test_month_ids_are_canonical_and_unique(self, build):
        locations = list(iter_months(build("2000-06-15")))
        ids = [loc.month.id for loc in locations]

        assert ids[0] == "2000-06"
        assert ids[-1] == "2080-05"
        assert len(set(ids)) == len(ids)


class TestPlaceholderEvents:
    """Test the placeholder event inserted into each month."""

    def test_one_event_per_month(self, build):
        assert all(len(loc.month.events) == 1 for loc in iter_months(build("2000-06-15")))

    def test_placeholder_fields(self, build):
        life_history = build("2000-06-15")
        event = life_history[0].years[0].months[0].events[0]

        assert event.id == "event-1"
        assert event.event_date == "2000-06-15"
        assert event.event_text == "0"
        assert event.kind is EventKind.TEXT
        assert event.updated_at == "2024-03-01T10:15:00+00:00"
        assert event.user_id == "string"

    def test_event_text_is_index_within_year(self, build):
        life_history = build("2000-06-15")

        first_year = life_history[0].years[0]
        assert [m.events[0].event_text for m in first_year.months] == [str(i) for i in range(7)]

        second_year = life_history[0].years[1]
        assert second_year.months[0].events[0].event_text == "0"
        assert second_year.months[-1].events[0].event_text == "11"

    def test_zero_index_placeholder_is_text_event(self, build):
        """Index "0" is a non-empty string, so it still counts as text."""
        event = build("2000-06-15")[0].years[0].months[0].events[0]
        assert is_text_event(event)

    def test_custom_user_id(self, build):
        life_history = build("2000-06-15", user_id="user-42")
        assert life_history[0].years[0].months[0].events[0].user_id == "user-42"

    def test_default_ids_are_unique(self):
        life_history = initiate("2000-06-15")
        ids = [loc.month.events[0].id for loc in iter_months(life_history)]

        assert len(set(ids)) == len(ids)


class TestDeterminism:
    """Test that structure depends only on birth date, clock and ids."""

    def test_same_inputs_same_structure(self, build):
        assert build("1980-08-20") == build("1980-08-20")

    def test_structure_ignores_ids_and_clock(self):
        first = initiate("1980-08-20")
        second = initiate("1980-08-20")

        assert months_of(first) == months_of(second)
        assert [d.id for d in first] == [d.id for d in second]

    def test_accepts_date_and_datetime(self, build):
        assert build(date(2000, 6, 15)) == build("2000-06-15")
        assert build(datetime(2000, 6, 15, 8, 30)) == build("2000-06-15")


class TestParsing:
    """Test the date collaborator's behaviour is inherited."""

    def test_malformed_date_propagates(self):
        with pytest.raises(ValueError):
            initiate("not a date")

    def test_iso_timestamp_accepted(self, build):
        months = months_of(build("2000-06-15T23:00:00"))
        assert months[0] == (2000, 6)

    def test_year_only_starts_in_january(self, build):
        """Missing month and day default to January 1st, not today."""
        months = months_of(build("2000"))

        assert months[0] == (2000, 1)
        assert months[-1] == (2080, 12)

    def test_year_and_month_starts_in_that_month(self, build):
        months = months_of(build("2000-06"))

        assert months[0] == (2000, 6)
        assert months[-1] == (2080, 5)


class TestMonthRange:
    """Test month_range."""

    def test_middle_year(self):
        assert month_range(2010, 2000, 6) == range(1, 13)

    def test_birth_year(self):
        assert month_range(2000, 2000, 6) == range(6, 13)

    def test_final_year(self):
        assert month_range(2080, 2000, 6) == range(1, 6)

    def test_final_year_january_birth(self):
        assert month_range(2080, 2000, 1) == range(1, 13)


class TestNotices:
    """Test the built notice."""

    def test_publishes_built_notice(self, build):
        bus = EventBus()
        received = []
        bus.subscribe(NoticeTypes.LIFE_HISTORY_BUILT, received.append)

        build("2000-06-15", bus=bus)

        assert received == [{"birth_date": "2000-06-15", "decades": 9}]

    def test_empty_input_publishes_nothing(self):
        bus = EventBus()
        received = []
        bus.subscribe(NoticeTypes.LIFE_HISTORY_BUILT, received.append)

        initiate(None, bus=bus)

        assert received == []
