"""Seed service - load and remove demo canvass data."""

from dataclasses import dataclass, field
from datetime import datetime

import duckdb
from loguru import logger

from app.models.canvass import Collection
from app.repositories.canvass import CanvassRepository
from app.services.dashboard.service import today_utc
from app.services.seeding.batching import write_in_chunks
from app.services.seeding.demo_data import DEMO_PREFIXES, DemoDataset, build_demo_dataset
from settings import DEMO_SEED, SEED_BATCH_SIZE, STORE_BATCH_LIMIT

SEED_ORDER = (Collection.MOHALLAS, Collection.HOUSEHOLDS, Collection.VOTERS, Collection.INFLUENCERS)
CLEAR_ORDER = (Collection.VOTERS, Collection.HOUSEHOLDS, Collection.MOHALLAS, Collection.INFLUENCERS)


@dataclass(frozen=True)
class SeedResult:
    success: bool
    message: str
    summary: dict = field(default_factory=dict)


class SeedService:
    """Writes the demo dataset in bounded batches and removes it again."""

    def __init__(
        self,
        repo: CanvassRepository,
        batch_size: int = SEED_BATCH_SIZE,
        seed: int = DEMO_SEED,
        surveyed_at: datetime | None = None,
    ):
        if not 1 <= batch_size <= STORE_BATCH_LIMIT:
            raise ValueError(f"Batch size must be between 1 and {STORE_BATCH_LIMIT}, got {batch_size}")
        self._repo = repo
        self._batch_size = batch_size
        self._seed = seed
        self._surveyed_at = surveyed_at
        logger.debug("SeedService initialized (batch_size={}, seed={})", batch_size, seed)

    def dataset(self) -> DemoDataset:
        return build_demo_dataset(self._seed, self._surveyed_at or today_utc())

    def demo_data_exists(self, dataset: DemoDataset | None = None) -> bool:
        """True if any demo record id is already stored."""
        dataset = dataset or self.dataset()
        for collection in SEED_ORDER:
            stored = self._repo.ids_with_prefix(collection, DEMO_PREFIXES[collection])
            if stored & {r.id for r in dataset.records(collection)}:
                return True
        return False

    def count(self, collection: Collection) -> int:
        return self._repo.count(collection)

    def seed_all(self) -> SeedResult:
        """Seed mohallas, households, voters and influencers, in that order."""
        dataset = self.dataset()
        try:
            if self.demo_data_exists(dataset):
                logger.warning("Demo data already present, seed skipped")
                return SeedResult(
                    success=False,
                    message="Demo data already exists. Clear existing data first to reseed.",
                )

            logger.info("Seeding demo data...")
            for collection in SEED_ORDER:
                written = write_in_chunks(
                    dataset.records(collection),
                    self._batch_size,
                    lambda batch, c=collection: self._repo.write_batch(c, batch),
                )
                logger.info("{}: +{}", collection.value, written)
        except duckdb.Error as e:
            logger.error("Seeding failed: {}", e)
            return SeedResult(success=False, message=f"Error seeding demo data: {e}")

        summary = dataset.summary()
        logger.success("Demo data seeded: {}", summary)
        return SeedResult(
            success=True,
            message=(
                f"Seeded demo data: {summary['mohallas']} mohallas, {summary['households']} households, "
                f"{summary['voters']} voters, {summary['influencers']} influencers"
            ),
            summary=summary,
        )

    def clear(self) -> SeedResult:
        """Delete every record whose id carries a demo prefix."""
        removed: dict[str, int] = {}
        try:
            logger.info("Clearing demo data...")
            for collection in CLEAR_ORDER:
                ids = sorted(self._repo.ids_with_prefix(collection, DEMO_PREFIXES[collection]))
                removed[collection.value] = write_in_chunks(
                    ids,
                    self._batch_size,
                    lambda batch, c=collection: self._repo.delete_batch(c, batch),
                )
                logger.info("{}: -{}", collection.value, removed[collection.value])
        except duckdb.Error as e:
            logger.error("Clearing failed: {}", e)
            return SeedResult(success=False, message=f"Error clearing demo data: {e}", summary=removed)

        return SeedResult(
            success=True,
            message=f"Cleared demo data: {sum(removed.values())} records",
            summary=removed,
        )
