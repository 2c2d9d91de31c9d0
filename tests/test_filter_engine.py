from __future__ import annotations

from core.filters import FilterEngine, FilterOption
from core.models import COLUMNS, Column, Entry, Field, IntegrityMessage, column_value

DOE = Entry(entry_id="e1", citation_key="doe2020")
LEE = Entry(entry_id="e2", citation_key="lee2019")


def _make_messages() -> list[IntegrityMessage]:
    return [
        IntegrityMessage(entry=DOE, field=Field("title"), message="empty title"),
        IntegrityMessage(entry=DOE, field=Field("year"), message="invalid year"),
        IntegrityMessage(entry=LEE, field=Field("title"), message="empty title"),
    ]


def _make_engine(rows: list[IntegrityMessage]) -> FilterEngine[IntegrityMessage, Column]:
    engine: FilterEngine[IntegrityMessage, Column] = FilterEngine(column_value)
    engine.initialize(COLUMNS, rows)
    return engine


def test_everything_visible_after_initialize() -> None:
    rows = _make_messages()
    engine = _make_engine(rows)

    assert all(engine.is_row_visible(row) for row in rows)
    assert engine.visible_rows() == rows
    assert engine.active_columns() == []


def test_domain_collapses_duplicates() -> None:
    engine = _make_engine(_make_messages())

    assert engine.get_filter_options(Column.KEY) == [
        FilterOption("doe2020", True),
        FilterOption("lee2019", True),
    ]
    assert [option.value for option in engine.get_filter_options(Column.MESSAGE)] == [
        "empty title",
        "invalid year",
    ]


def test_toggle_hides_only_rows_with_that_value() -> None:
    rows = _make_messages()
    engine = _make_engine(rows)

    engine.toggle_value(Column.FIELD, "Year")

    assert "Year" not in engine.column_filter(Column.FIELD).selected
    assert [engine.is_row_visible(row) for row in rows] == [True, False, True]
    assert engine.active_columns() == [Column.FIELD]

    engine.toggle_value(Column.FIELD, "Year")

    assert all(engine.is_row_visible(row) for row in rows)
    assert not engine.column_filter(Column.FIELD).active


def test_filters_combine_as_conjunction() -> None:
    rows = _make_messages()
    engine = _make_engine(rows)

    engine.toggle_value(Column.MESSAGE, "invalid year")
    assert engine.visible_rows() == [rows[0], rows[2]]

    engine.toggle_value(Column.KEY, "doe2020")
    assert engine.visible_rows() == [rows[2]]


def test_set_selected_ignores_values_outside_domain() -> None:
    rows = _make_messages()
    engine = _make_engine(rows)

    engine.set_selected(Column.KEY, ["lee2019", "nobody"])

    assert engine.column_filter(Column.KEY).selected == {"lee2019"}
    assert engine.visible_rows() == [rows[2]]

    engine.set_selected(Column.KEY, [])
    assert engine.visible_rows() == []


def test_toggle_of_unknown_value_is_ignored() -> None:
    rows = _make_messages()
    engine = _make_engine(rows)
    calls: list[str] = []
    engine.subscribe(lambda: calls.append("changed"))

    engine.toggle_value(Column.KEY, "nobody")

    assert engine.column_filter(Column.KEY).selected == {"doe2020", "lee2019"}
    assert calls == []


def test_reset_all_restores_initial_state() -> None:
    rows = _make_messages()
    engine = _make_engine(rows)
    engine.toggle_value(Column.KEY, "doe2020")
    engine.toggle_value(Column.FIELD, "Title")
    engine.toggle_value(Column.MESSAGE, "invalid year")
    engine.toggle_value(Column.FIELD, "Title")
    assert engine.visible_rows() == [rows[2]]

    engine.reset_all()

    assert engine.visible_rows() == rows
    assert engine.active_columns() == []
    for column in COLUMNS:
        column_filter = engine.column_filter(column)
        assert column_filter.selected == set(column_filter.domain)

    engine.reset_all()
    assert engine.visible_rows() == rows


def test_listeners_fire_after_visibility_changed() -> None:
    rows = _make_messages()
    engine = _make_engine(rows)
    seen: list[int] = []
    engine.subscribe(lambda: seen.append(len(engine.visible_rows())))

    engine.toggle_value(Column.KEY, "lee2019")
    engine.reset_all()

    assert seen == [2, 3]


def test_empty_rows_give_empty_menus() -> None:
    engine = _make_engine([])

    for column in COLUMNS:
        assert engine.get_filter_options(column) == []
    assert engine.visible_rows() == []
    assert engine.active_columns() == []


def test_initialize_is_idempotent() -> None:
    rows = _make_messages()
    engine = _make_engine(rows)
    before = {column: engine.get_filter_options(column) for column in COLUMNS}

    engine.initialize(COLUMNS, rows)

    assert {column: engine.get_filter_options(column) for column in COLUMNS} == before
    assert engine.visible_rows() == rows
