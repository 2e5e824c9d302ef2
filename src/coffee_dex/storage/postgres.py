"""PostgreSQL storage (psycopg).

Uniqueness of candidate ids and coffee ids is enforced by unique indexes on
the mapping table, so reservation is a single ``insert ... on conflict do
nothing`` statement.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from coffee_dex.exceptions import NotFoundError, PersistenceError
from coffee_dex.schema import Candidate, MappingRecord, TastingRecord, TraitAnnotation
from coffee_dex.storage.base import CandidateRepository, Reservation, TastingRecordRepository

logger = logging.getLogger(__name__)

MAPPING_COLUMNS = (
    "id, coffee_id, candidate_id, candidate_name, nickname, level, confidence, "
    "description, trait_mapping, created_at"
)

CREATE_MAPPINGS_SQL = """
    create table if not exists coffee_candidate (
      id text primary key,
      coffee_id text not null,
      candidate_id integer not null,
      candidate_name text not null,
      nickname text not null default '',
      level integer not null default 1,
      confidence double precision not null,
      description text not null,
      trait_mapping jsonb not null default '[]'::jsonb,
      created_at timestamptz not null default now()
    )
"""
CREATE_MAPPING_INDEXES_SQL = (
    "create unique index if not exists idx_coffee_candidate_candidate on coffee_candidate(candidate_id)",
    "create unique index if not exists idx_coffee_candidate_coffee on coffee_candidate(coffee_id)",
)
CREATE_COFFEES_SQL = """
    create table if not exists coffees (
      id text primary key,
      record_json jsonb not null,
      created_at timestamptz not null default now(),
      updated_at timestamptz not null default now()
    )
"""


class _PostgresBase:
    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("database_url is required for PostgreSQL storage")
        self.database_url = database_url
        self._schema_ready = False

    def _conn(self) -> psycopg.Connection:
        return psycopg.connect(self.database_url, row_factory=dict_row)

    def _ensure_schema(self, cur) -> None:
        if self._schema_ready:
            return
        for statement in self._schema_statements():
            cur.execute(statement)
        self._schema_ready = True

    def _schema_statements(self) -> tuple[str, ...]:
        return ()


class PostgresTastingRecordRepository(_PostgresBase, TastingRecordRepository):
    def _schema_statements(self) -> tuple[str, ...]:
        return (CREATE_COFFEES_SQL,)

    def get_by_id(self, record_id: str) -> TastingRecord:
        try:
            with self._conn() as conn:
                with conn.cursor() as cur:
                    self._ensure_schema(cur)
                    cur.execute("select record_json from coffees where id = %s", (record_id,))
                    row = cur.fetchone()
        except psycopg.Error as e:
            raise PersistenceError(f"failed to load coffee {record_id}: {e}") from e

        if row is None:
            raise NotFoundError(f"coffee not found: {record_id}")
        return TastingRecord.model_validate(_as_json(row["record_json"]))

    def add(self, record: TastingRecord) -> TastingRecord:
        try:
            with self._conn() as conn:
                with conn.cursor() as cur:
                    self._ensure_schema(cur)
                    cur.execute(
                        """
                        insert into coffees (id, record_json) values (%s, %s)
                        on conflict (id) do update set record_json = excluded.record_json, updated_at = now()
                        """,
                        (record.id, Jsonb(record.model_dump(mode="json"))),
                    )
                conn.commit()
        except psycopg.Error as e:
            raise PersistenceError(f"failed to store coffee {record.id}: {e}") from e
        return record


class PostgresCandidateRepository(_PostgresBase, CandidateRepository):
    """Candidate registry backed by the ``coffee_candidate`` table.

    Candidate reference data stays in memory; only mappings are persisted.
    """

    def __init__(self, database_url: str, candidates: tuple[Candidate, ...]):
        _PostgresBase.__init__(self, database_url)
        CandidateRepository.__init__(self, candidates)

    def _schema_statements(self) -> tuple[str, ...]:
        return (CREATE_MAPPINGS_SQL, *CREATE_MAPPING_INDEXES_SQL)

    def is_used(self, candidate_id: int) -> bool:
        row = self._fetch_one("select 1 as used from coffee_candidate where candidate_id = %s", (candidate_id,))
        return row is not None

    def used_candidate_ids(self) -> set[int]:
        rows = self._fetch_all("select candidate_id from coffee_candidate", ())
        return {int(row["candidate_id"]) for row in rows}

    def reserve_and_create(self, mapping: MappingRecord) -> Reservation:
        try:
            with self._conn() as conn:
                with conn.cursor() as cur:
                    self._ensure_schema(cur)
                    cur.execute(
                        f"""
                        insert into coffee_candidate ({MAPPING_COLUMNS})
                        values (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                        on conflict do nothing
                        returning id
                        """,
                        (
                            mapping.id,
                            mapping.coffee_id,
                            mapping.candidate_id,
                            mapping.candidate_name,
                            mapping.nickname,
                            mapping.level,
                            mapping.confidence,
                            mapping.description,
                            Jsonb([item.model_dump() for item in mapping.trait_mapping]),
                            mapping.created_at,
                        ),
                    )
                    inserted = cur.fetchone()
                    if inserted is not None:
                        conn.commit()
                        return Reservation.RESERVED

                    cur.execute(
                        "select 1 as mapped from coffee_candidate where coffee_id = %s",
                        (mapping.coffee_id,),
                    )
                    coffee_mapped = cur.fetchone() is not None
                conn.rollback()
        except psycopg.Error as e:
            raise PersistenceError(f"failed to reserve candidate {mapping.candidate_id}: {e}") from e

        if coffee_mapped:
            return Reservation.COFFEE_MAPPED
        logger.info("candidate %s already reserved", mapping.candidate_id)
        return Reservation.CANDIDATE_USED

    def get_mapping(self, coffee_id: str) -> MappingRecord:
        row = self._fetch_one(
            f"select {MAPPING_COLUMNS} from coffee_candidate where coffee_id = %s",
            (coffee_id,),
        )
        if row is None:
            raise NotFoundError(f"mapping not found for coffee: {coffee_id}")
        return _row_to_mapping(row)

    def list_mappings(self) -> list[MappingRecord]:
        rows = self._fetch_all(
            f"select {MAPPING_COLUMNS} from coffee_candidate order by created_at desc",
            (),
        )
        return [_row_to_mapping(row) for row in rows]

    def update_nickname(self, coffee_id: str, nickname: str) -> MappingRecord:
        try:
            with self._conn() as conn:
                with conn.cursor() as cur:
                    self._ensure_schema(cur)
                    cur.execute(
                        f"""
                        update coffee_candidate set nickname = %s where coffee_id = %s
                        returning {MAPPING_COLUMNS}
                        """,
                        (nickname, coffee_id),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as e:
            raise PersistenceError(f"failed to update nickname for coffee {coffee_id}: {e}") from e

        if row is None:
            raise NotFoundError(f"mapping not found for coffee: {coffee_id}")
        return _row_to_mapping(row)

    def _fetch_one(self, query: str, params: tuple) -> dict | None:
        try:
            with self._conn() as conn:
                with conn.cursor() as cur:
                    self._ensure_schema(cur)
                    cur.execute(query, params)
                    return cur.fetchone()
        except psycopg.Error as e:
            raise PersistenceError(f"query failed: {e}") from e

    def _fetch_all(self, query: str, params: tuple) -> list[dict]:
        try:
            with self._conn() as conn:
                with conn.cursor() as cur:
                    self._ensure_schema(cur)
                    cur.execute(query, params)
                    return cur.fetchall()
        except psycopg.Error as e:
            raise PersistenceError(f"query failed: {e}") from e


def _row_to_mapping(row: dict) -> MappingRecord:
    return MappingRecord(
        id=row["id"],
        coffee_id=row["coffee_id"],
        candidate_id=int(row["candidate_id"]),
        candidate_name=row["candidate_name"],
        nickname=row["nickname"] or "",
        level=int(row["level"]),
        confidence=float(row["confidence"]),
        description=row["description"],
        trait_mapping=[TraitAnnotation.model_validate(item) for item in _as_json(row["trait_mapping"]) or []],
        created_at=_as_datetime(row["created_at"]),
    )


def _as_json(value):
    if isinstance(value, (str, bytes)):
        return json.loads(value)
    return value


def _as_datetime(value: datetime | str) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    raise ValueError("Invalid datetime value")
