"""
Base ingester class.

Every ingester is a small ETL pipeline: fetch raw records from a source,
transform each into a model, load it into the vote store with an upsert.
A bad record is logged and counted, and the run moves on to the next one.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import AsyncGenerator, Generic, TypeVar

from votematch.database.base import VoteStore

T = TypeVar('T')


def _empty_stats() -> dict:
    return {
        "processed": 0,
        "inserted": 0,
        "updated": 0,
        "errors": 0,
        "started_at": None,
        "completed_at": None
    }


class BaseIngester(ABC, Generic[T]):
    """
    Base class for all data ingesters.

    The store is injected so the same ingester can fill an in-memory store
    in tests and MongoDB in production.
    """

    def __init__(self, store: VoteStore):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.store = store
        self.stats = _empty_stats()

    @abstractmethod
    def fetch_data(self, **kwargs) -> AsyncGenerator[dict, None]:
        """
        Fetch data from external source.

        This should be an async generator that yields raw data items.

        Args:
            **kwargs: Parameters for fetching data

        Yields:
            Raw data dictionaries from the source
        """

    @abstractmethod
    def transform(self, raw_data: dict) -> T:
        """
        Transform raw data to our model.

        Raises:
            ValidationError: If the raw record is unusable
        """

    @abstractmethod
    async def load(self, item: T, raw_data: dict) -> bool:
        """
        Load item into the store (upsert).

        Args:
            item: Transformed data item
            raw_data: The raw record it came from

        Returns:
            True if new insert, False if update
        """

    async def process_item(self, raw_item: dict) -> bool:
        """
        Process a single item through the ETL pipeline.

        Returns:
            True if the item was loaded, False if it failed
        """
        self.stats["processed"] += 1
        try:
            item = self.transform(raw_item)
            was_insert = await self.load(item, raw_item)
        except Exception as e:
            self.stats["errors"] += 1
            self.logger.error(f"Error processing item: {e}", exc_info=True)
            return False

        if was_insert:
            self.stats["inserted"] += 1
        else:
            self.stats["updated"] += 1
        return True

    async def run(self, **kwargs) -> dict:
        """
        Execute the full ETL pipeline.

        Args:
            **kwargs: Passed to fetch_data()

        Returns:
            Statistics dict with counts and timing
        """
        self.logger.info(f"Starting {self.__class__.__name__}...")
        self.stats["started_at"] = datetime.now(timezone.utc)

        try:
            async for raw_item in self.fetch_data(**kwargs):
                await self.process_item(raw_item)

        except (KeyboardInterrupt, asyncio.CancelledError):
            self.logger.warning("Ingestion interrupted")
            raise

        except Exception as e:
            self.logger.error(f"Fatal error during ingestion: {e}")
            raise

        finally:
            self.stats["completed_at"] = datetime.now(timezone.utc)

            duration = self.stats["completed_at"] - self.stats["started_at"]
            self.logger.info(
                f"Ingestion complete. "
                f"Processed: {self.stats['processed']}, "
                f"Inserted: {self.stats['inserted']}, "
                f"Updated: {self.stats['updated']}, "
                f"Errors: {self.stats['errors']}, "
                f"Duration: {duration}"
            )

        return self.stats
