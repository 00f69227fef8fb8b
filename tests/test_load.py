"""Tests for the SQLite store gateway."""

from __future__ import annotations

import os

import pytest

from pgcb import load
from pgcb.validate import GenerationRecord


def rec(year, month, day=1, time="12:00:00", load_mw="100"):
    return GenerationRecord(year=year, month=month, day=day, time=time, load=load_mw)


def test_get_engine_uses_sqlite_path(monkeypatch):
    """`get_engine` should build a SQLite engine for the configured path."""

    captured = {}

    def fake_create_engine(url, connect_args):
        captured.update(url=url, connect_args=connect_args)
        return "engine"

    monkeypatch.setattr(load, "create_engine", fake_create_engine)

    assert load.get_engine("data/x.sqlite") == "engine"
    assert captured["url"] == "sqlite:///data/x.sqlite"
    assert captured["connect_args"] == {"timeout": load.SQLITE_TIMEOUT, "check_same_thread": False}


def test_init_db_is_idempotent(store):
    load.init_db(store)
    load.init_db(store)

    assert load.count_records(store) == 0


def test_insert_record_assigns_sequential_ids(store):
    first = load.insert_record(store, rec(2018, 1))
    second = load.insert_record(store, rec(2018, 2))

    assert second == first + 1
    assert load.count_records(store) == 2


def test_query_records_roundtrips_text_fields(store):
    load.insert_record(store, GenerationRecord(year=2019, month=3, day=4, time="01:00:00", load="7,5", comment="x"))

    (row,) = load.query_records(store, 2019, 2019, 1, 12)

    assert row["load"] == "7,5"
    assert row["comment"] == "x"
    assert row["id"] == 1


def test_query_records_orders_year_month_by_direction_day_time_ascending(store):
    for r in [
        rec(2018, 1, 2, "01:00:00"),
        rec(2018, 1, 1, "02:00:00"),
        rec(2018, 1, 1, "01:00:00"),
        rec(2019, 5, 1),
        rec(2018, 3, 1),
    ]:
        load.insert_record(store, r)

    desc = load.query_records(store, 2017, 2020, 1, 12, "desc")
    asc = load.query_records(store, 2017, 2020, 1, 12, "asc")

    key = lambda row: (row["year"], row["month"], row["day"], row["time"])  # noqa: E731
    assert [key(r) for r in desc] == [
        (2019, 5, 1, "12:00:00"),
        (2018, 3, 1, "12:00:00"),
        (2018, 1, 1, "01:00:00"),
        (2018, 1, 1, "02:00:00"),
        (2018, 1, 2, "01:00:00"),
    ]
    assert [key(r) for r in asc] == [
        (2018, 1, 1, "01:00:00"),
        (2018, 1, 1, "02:00:00"),
        (2018, 1, 2, "01:00:00"),
        (2018, 3, 1, "12:00:00"),
        (2019, 5, 1, "12:00:00"),
    ]


def test_query_records_year_and_month_bounds_are_independent(store):
    """Month bounds apply to every year; this is not a chronological range."""

    for year in range(2016, 2022):
        for month in (1, 6, 12):
            load.insert_record(store, rec(year, month))
    load.insert_record(store, rec(2017, 0))

    rows = load.query_records(store, 2017, 2020, 6, 12, "asc")

    assert {r["year"] for r in rows} == {2017, 2018, 2019, 2020}
    assert {r["month"] for r in rows} == {6, 12}
    # 2018-01 lies inside the chronological window 2017-06..2020-12 but is out.
    assert (2018, 1) not in {(r["year"], r["month"]) for r in rows}


def test_query_records_month_zero_excluded_by_month_bound(store):
    load.insert_record(store, rec(2017, 0))

    assert load.query_records(store, 2017, 2020, 1, 12) == []
    assert len(load.query_records(store, 2017, 2020, 0, 12)) == 1


def test_query_records_rejects_unknown_direction(store):
    with pytest.raises(ValueError):
        load.query_records(store, 2017, 2020, 1, 12, "sideways")


def test_reset_store_removes_file(db_path):
    engine = load.open_store(db_path)
    load.insert_record(engine, rec(2018, 1))
    engine.dispose()
    assert load.store_exists(db_path)

    load.reset_store(db_path)

    assert not os.path.exists(db_path)
    # Removing a missing store is a no-op.
    load.reset_store(db_path)


def test_main_init_db(db_path, capsys):
    """CLI `--init-db` flag should create the store."""

    code = load.main(["--db-path", db_path, "--init-db"])

    assert code == 0
    assert os.path.exists(db_path)
    assert "DB initialised." in capsys.readouterr().out


def test_main_count(store, db_path, capsys):
    load.insert_record(store, rec(2018, 1))

    assert load.main(["--db-path", db_path, "--count"]) == 0
    assert "Total rows: 1" in capsys.readouterr().out


def test_main_no_args(db_path, capsys):
    """Without CLI flags the command should report that nothing was done."""

    assert load.main(["--db-path", db_path]) == 0
    assert "Nothing to do" in capsys.readouterr().out
