from app.services.seeding.batching import chunked, write_in_chunks
from app.services.seeding.demo_data import DEMO_PREFIXES, DemoDataset, build_demo_dataset
from app.services.seeding.service import SeedResult, SeedService

__all__ = [
    "DEMO_PREFIXES",
    "DemoDataset",
    "SeedResult",
    "SeedService",
    "build_demo_dataset",
    "chunked",
    "write_in_chunks",
]
