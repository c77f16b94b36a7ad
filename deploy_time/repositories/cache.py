"""Deployment cache repository - TTL-bounded JSON document storage."""

import json
from collections.abc import Callable
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

import settings
from deploy_time.errors import CacheCorruptedError
from deploy_time.models import CacheStats, DeploymentRecord, now_ms


class DeploymentCacheRepository:
    """Repository for cached program deployments.

    The whole cache lives in memory and is rewritten to a single JSON document
    on every mutation. Storage failures are logged and never raised: a broken
    cache only costs a fresh history scan.
    """

    def __init__(
        self,
        cache_dir: Path | None = None,
        ttl_ms: int = settings.CACHE_TTL_MS,
        clock: Callable[[], int] = now_ms,
    ):
        self._dir = Path(cache_dir or settings.CACHE_DIR)
        self._file = self._dir / settings.CACHE_FILE
        self._ttl_ms = ttl_ms
        self._clock = clock
        self._records: dict[str, DeploymentRecord] = {}
        self.load()
        logger.debug("{} initialized: {} records from {}", self.__class__.__name__, len(self._records), self._file)

    @property
    def path(self) -> Path:
        return self._file

    def load(self) -> None:
        """Read the persisted document; missing or corrupted files give an empty cache."""
        self._records = {}
        if not self._file.exists():
            return

        try:
            self._records = self._parse(self._file.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, CacheCorruptedError) as e:
            logger.error("Error loading cache: {}", e)
            self._records = {}

    def _parse(self, text: str) -> dict[str, DeploymentRecord]:
        try:
            document = json.loads(text)
        except ValueError as e:
            raise CacheCorruptedError(f"Cache file is not valid JSON: {e}") from e

        if not isinstance(document, dict):
            raise CacheCorruptedError(f"Expected a JSON object, got {type(document).__name__}")

        records = {}
        for program_id, entry in document.items():
            try:
                records[program_id] = DeploymentRecord.model_validate(entry)
            except ValidationError as e:
                logger.warning("Dropping invalid cache entry {}: {}", program_id, e.error_count())
        return records

    def _save(self) -> None:
        """Persist the cache, logging instead of raising on failure."""
        try:
            self._dir.mkdir(parents=True, exist_ok=True)
            document = {pid: record.to_document() for pid, record in self._records.items()}
            self._file.write_text(json.dumps(document, indent=2), encoding="utf-8")
        except OSError as e:
            logger.error("Error saving cache: {}", e)

    def get(self, program_id: str) -> DeploymentRecord | None:
        """Return a valid record, evicting it if it has expired."""
        record = self._records.get(program_id)
        if record is None:
            return None

        if record.is_expired(self._clock(), self._ttl_ms):
            logger.debug("Cache expired: {}", program_id)
            del self._records[program_id]
            self._save()
            return None

        logger.debug("Cache hit: {}", program_id)
        return record

    def put(
        self,
        program_id: str,
        signature: str,
        slot: int,
        timestamp: int,
        is_program_data: bool = False,
        program_data_account: str | None = None,
    ) -> DeploymentRecord:
        """Store a record stamped with the current time, replacing any previous one."""
        record = DeploymentRecord(
            program_id=program_id,
            signature=signature,
            slot=slot,
            deployment_timestamp=timestamp,
            last_checked=self._clock(),
            is_program_data=is_program_data,
            program_data_account=program_data_account or None,
        )
        self._records[program_id] = record
        self._save()
        logger.debug("Cache saved: {}", program_id)
        return record

    def clear(self) -> None:
        """Drop all records and remove the backing file and directory."""
        self._records.clear()
        self._save()

        try:
            if self._file.exists():
                self._file.unlink()
            if self._dir.exists():
                self._dir.rmdir()
        except OSError as e:
            logger.error("Error removing cache files: {}", e)
        logger.info("All cache cleared")

    def stats(self) -> CacheStats:
        """Count valid and expired records without evicting anything."""
        now = self._clock()
        expired = sum(1 for r in self._records.values() if r.is_expired(now, self._ttl_ms))
        total = len(self._records)
        return CacheStats(total=total, valid=total - expired, expired=expired)

    def __len__(self) -> int:
        return len(self._records)
