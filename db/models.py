"""
db/models.py

SQLAlchemy table definitions for the local report store.

Responsibilities
----------------
- Provide a programmatic (SQLAlchemy Core) representation of the
  `generation_records` table; `pgcb.load.init_db` creates it from `metadata`.

Conventions
-----------
- `id` is a store-assigned integer surrogate key.
- Measurement columns are Text: values are kept as published (after digit
  normalisation) rather than cast to numbers.
"""

from sqlalchemy import Column, Integer, MetaData, Table, Text

metadata = MetaData()

# One row per PGCB report reading (date + time of day).
generation_records = Table(
    "generation_records",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    # Reading date/time
    Column("year", Integer, index=True),
    Column("month", Integer),
    Column("day", Integer),
    Column("time", Text),
    # Totals (MW)
    Column("produced", Text),
    Column("load", Text),
    Column("loss", Text),
    Column("load_shed", Text),
    # Generation by fuel (MW)
    Column("gas", Text),
    Column("liquid_fuel", Text),
    Column("coal", Text),
    Column("hydro", Text),
    Column("solar", Text),
    # Cross-border imports (MW)
    Column("bheramara", Text),
    Column("tripura", Text),
    Column("comment", Text),
)
