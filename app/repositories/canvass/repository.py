"""Canvass repository - the four field collections in DuckDB."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

import polars as pl
from loguru import logger

from app.models.canvass import CanvassSnapshot, Collection, EnhancedVoter, Household, Influencer, Mohalla
from app.repositories.base import BaseRepository

# Column order matches both the table DDL and the entity field order.
_SCHEMAS: dict[Collection, dict[str, pl.DataType]] = {
    Collection.MOHALLAS: {
        "id": pl.Utf8,
        "name": pl.Utf8,
        "parent_ward_id": pl.Utf8,
    },
    Collection.HOUSEHOLDS: {
        "id": pl.Utf8,
        "mohalla_id": pl.Utf8,
        "surveyed": pl.Boolean,
        "sentiment": pl.Utf8,
        "last_surveyed_at": pl.Datetime("us"),
        "head_name": pl.Utf8,
        "influence_level": pl.Int64,
    },
    Collection.VOTERS: {
        "id": pl.Utf8,
        "household_id": pl.Utf8,
        "present": pl.Boolean,
        "current_stance": pl.Utf8,
        "turnout_propensity": pl.Utf8,
        "tagged_by_influencer": pl.Boolean,
        "transport_needed": pl.Boolean,
        "away_status": pl.Boolean,
        "name": pl.Utf8,
    },
    Collection.INFLUENCERS: {
        "id": pl.Utf8,
        "current_stance": pl.Utf8,
        "can_be_influenced": pl.Boolean,
        "name": pl.Utf8,
        "estimated_vote_control": pl.Int64,
    },
}


def _to_db(value: Any) -> Any:
    """Store enums as their values and timestamps as naive UTC."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _utc(ts: datetime | None) -> datetime | None:
    return ts.replace(tzinfo=timezone.utc) if ts is not None else None


class CanvassRepository(BaseRepository):
    """Read and write mohallas, households, voters and influencers."""

    def _columns(self, collection: Collection) -> list[str]:
        return list(_SCHEMAS[collection])

    def _frame(self, collection: Collection, records: list) -> pl.DataFrame:
        columns = self._columns(collection)
        rows = [tuple(_to_db(getattr(r, c)) for c in columns) for r in records]
        return pl.DataFrame(rows, schema=_SCHEMAS[collection], orient="row")

    def write_batch(self, collection: Collection, records: list) -> int:
        """Insert records in a single transaction. Returns rows written."""
        self._require_writable()
        if not records:
            return 0

        df = self._frame(collection, records)
        cols = ", ".join(self._columns(collection))
        self.execute("BEGIN TRANSACTION")
        try:
            self._db.register("batch_df", df)
            self.execute(f"INSERT INTO {collection.value} ({cols}) SELECT {cols} FROM batch_df")
            self._db.unregister("batch_df")
            self.execute("COMMIT")
        except Exception:
            self.execute("ROLLBACK")
            raise
        self.clear_cache()
        logger.debug("{}: +{} rows", collection.value, len(records))
        return len(records)

    def delete_batch(self, collection: Collection, ids: list[str]) -> int:
        """Delete records by id in a single transaction. Returns ids requested."""
        self._require_writable()
        if not ids:
            return 0

        placeholders = ", ".join("?" for _ in ids)
        self.execute("BEGIN TRANSACTION")
        try:
            self.execute(f"DELETE FROM {collection.value} WHERE id IN ({placeholders})", list(ids))
            self.execute("COMMIT")
        except Exception:
            self.execute("ROLLBACK")
            raise
        self.clear_cache()
        logger.debug("{}: -{} rows", collection.value, len(ids))
        return len(ids)

    def ids_with_prefix(self, collection: Collection, prefix: str) -> set[str]:
        """Ids starting with prefix."""
        rows = self.fetchall(
            f"SELECT id FROM {collection.value} WHERE starts_with(id, ?)",
            [prefix],
        )
        return {r[0] for r in rows}

    def count(self, collection: Collection) -> int:
        row = self.fetchone(f"SELECT COUNT(*) FROM {collection.value}")
        return row[0] if row else 0

    def _rows(self, collection: Collection) -> list[tuple]:
        cols = ", ".join(self._columns(collection))
        return self.fetchall(f"SELECT {cols} FROM {collection.value} ORDER BY id")

    def mohallas(self) -> list[Mohalla]:
        return self._cached(
            "mohallas",
            lambda: [
                Mohalla(id=r[0], name=r[1] or "", parent_ward_id=r[2])
                for r in self._rows(Collection.MOHALLAS)
            ],
        )

    def households(self) -> list[Household]:
        return self._cached(
            "households",
            lambda: [
                Household(
                    id=r[0],
                    mohalla_id=r[1],
                    surveyed=bool(r[2]),
                    sentiment=r[3],
                    last_surveyed_at=_utc(r[4]),
                    head_name=r[5] or "",
                    influence_level=r[6] or 0,
                )
                for r in self._rows(Collection.HOUSEHOLDS)
            ],
        )

    def voters(self) -> list[EnhancedVoter]:
        return self._cached(
            "voters",
            lambda: [
                EnhancedVoter(
                    id=r[0],
                    household_id=r[1],
                    present=bool(r[2]),
                    current_stance=r[3],
                    turnout_propensity=r[4],
                    tagged_by_influencer=bool(r[5]),
                    transport_needed=bool(r[6]),
                    away_status=bool(r[7]),
                    name=r[8] or "",
                )
                for r in self._rows(Collection.VOTERS)
            ],
        )

    def influencers(self) -> list[Influencer]:
        return self._cached(
            "influencers",
            lambda: [
                Influencer(
                    id=r[0],
                    current_stance=r[1],
                    can_be_influenced=bool(r[2]),
                    name=r[3] or "",
                    estimated_vote_control=r[4] or 0,
                )
                for r in self._rows(Collection.INFLUENCERS)
            ],
        )

    def load_snapshot(self) -> CanvassSnapshot:
        """All four collections, in id order."""
        snapshot = CanvassSnapshot(
            mohallas=tuple(self.mohallas()),
            households=tuple(self.households()),
            voters=tuple(self.voters()),
            influencers=tuple(self.influencers()),
        )
        logger.debug(
            "Snapshot loaded: {} mohallas, {} households, {} voters, {} influencers",
            len(snapshot.mohallas),
            len(snapshot.households),
            len(snapshot.voters),
            len(snapshot.influencers),
        )
        return snapshot
