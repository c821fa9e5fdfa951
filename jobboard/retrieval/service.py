"""Job retrieval service: the public entry point for reading jobs.

Both operations are total. Configuration, transport and data errors are
logged and turned into an empty listing or an absent job; nothing is raised
to the caller. Callers that need to tell "no jobs" apart from "store
unreachable" must watch the ``retrieval.*.failed`` log events.
"""

import logging
from typing import List, Optional, Tuple

from jobboard.config.environment import EnvironmentConfig
from jobboard.config.models import AppConfig, MappingMode
from jobboard.domain.models import Job, JobStatus
from jobboard.logging import get_logger, log_context
from jobboard.normalization.exceptions import RecordMappingError
from jobboard.normalization.models import LEGACY_LISTING, LEGACY_SINGLE, STRICT
from jobboard.normalization.service import RecordMapper
from jobboard.store.base import BaseRecordStore
from jobboard.store.exceptions import StoreError
from jobboard.store.factory import get_store

logger = get_logger(__name__, component="retrieval")

ACTIVE_FILTER = f"{{status}} = '{JobStatus.ACTIVE.value}'"
LISTING_SORT = (("posted_date", "desc"),)


def mappers_for_mode(mode: str) -> Tuple[RecordMapper, RecordMapper]:
    """Return the (listing, single-record) mappers for a mapping mode."""
    if MappingMode(mode) is MappingMode.LEGACY:
        return RecordMapper(LEGACY_LISTING), RecordMapper(LEGACY_SINGLE)
    return RecordMapper(STRICT), RecordMapper(STRICT)


def _posted_date_key(job: Job) -> str:
    return str(job.posted_date or "")


class JobRetrievalService:
    """Lists active jobs and looks up single jobs from a record store.

    The store is injected, so tests and alternative backends can substitute
    any BaseRecordStore. The service keeps no state between calls: no cache,
    no retries, no request coalescing.
    """

    def __init__(
        self,
        store: BaseRecordStore,
        listing_mapper: Optional[RecordMapper] = None,
        single_mapper: Optional[RecordMapper] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        """Initialize JobRetrievalService.

        Args:
            store: Record store to read from
            listing_mapper: Mapper for list_active_jobs (defaults to the strict policy)
            single_mapper: Mapper for get_job (defaults to the strict policy)
            logger_instance: Logger instance (defaults to module logger)
        """
        self.store = store
        self.listing_mapper = listing_mapper or RecordMapper(STRICT)
        self.single_mapper = single_mapper or RecordMapper(STRICT)
        self.logger = logger_instance or logger

    @classmethod
    def from_config(cls, app_config: AppConfig, env_config: EnvironmentConfig) -> "JobRetrievalService":
        """Build the service with the configured store and mapping mode.

        Raises:
            StoreConfigurationError: If the configured store type is unknown
        """
        store = get_store(app_config.store, env_config, app_config.advanced)
        listing_mapper, single_mapper = mappers_for_mode(app_config.mapping.mode)
        return cls(store, listing_mapper=listing_mapper, single_mapper=single_mapper)

    def list_active_jobs(self) -> List[Job]:
        """List every active job, newest first.

        Fetches all pages of records matching ``{status} = 'active'``, maps
        each one, skips records that fail mapping, drops anything not active,
        and sorts by posted_date descending (stable).

        Returns:
            Active jobs; an empty list when there are none or on any error
        """
        with log_context(operation="list_active_jobs"):
            try:
                return self._list_active_jobs()
            except StoreError as e:
                self.logger.error(
                    f"Failed to list jobs: {e}",
                    extra={
                        "event": "retrieval.list.failed",
                        "error_type": type(e).__name__,
                    },
                )
            except Exception as e:
                self.logger.error(
                    f"Unexpected error while listing jobs: {e}",
                    exc_info=True,
                    extra={
                        "event": "retrieval.list.failed",
                        "error_type": type(e).__name__,
                    },
                )
            return []

    def _list_active_jobs(self) -> List[Job]:
        records = self.store.list_records(filter_formula=ACTIVE_FILTER, sort=LISTING_SORT)

        jobs: List[Job] = []
        skipped = 0
        for raw in records:
            try:
                result = self.listing_mapper.map_raw_record(raw)
            except RecordMappingError as e:
                skipped += 1
                self.logger.warning(
                    f"Skipping record: {e}",
                    extra={
                        "event": "retrieval.record.skipped",
                        "record_id": e.record_id,
                        "missing_fields": e.missing_fields,
                    },
                )
                continue

            if result.job.status != JobStatus.ACTIVE.value:
                skipped += 1
                continue
            jobs.append(result.job)

        jobs.sort(key=_posted_date_key, reverse=True)

        self.logger.info(
            "Listed active jobs",
            extra={
                "event": "retrieval.list.completed",
                "job_count": len(jobs),
                "skipped_count": skipped,
            },
        )
        return jobs

    def get_job(self, record_id: str) -> Optional[Job]:
        """Look up one active job by record ID.

        Args:
            record_id: Store-assigned record ID

        Returns:
            The job, or None if it does not exist, is not active, is missing
            required fields, or the store could not be reached
        """
        if not isinstance(record_id, str) or not record_id.strip():
            self.logger.warning(
                "Ignoring lookup with blank record ID",
                extra={"event": "retrieval.get.invalid_id"},
            )
            return None
        record_id = record_id.strip()

        with log_context(operation="get_job", record_id=record_id):
            try:
                return self._get_job(record_id)
            except StoreError as e:
                self.logger.error(
                    f"Failed to fetch job: {e}",
                    extra={
                        "event": "retrieval.get.failed",
                        "error_type": type(e).__name__,
                    },
                )
            except Exception as e:
                self.logger.error(
                    f"Unexpected error while fetching job: {e}",
                    exc_info=True,
                    extra={
                        "event": "retrieval.get.failed",
                        "error_type": type(e).__name__,
                    },
                )
            return None

    def _get_job(self, record_id: str) -> Optional[Job]:
        raw = self.store.find_record(record_id)
        if raw is None:
            self.logger.info("Job not found", extra={"event": "retrieval.get.not_found"})
            return None

        try:
            result = self.single_mapper.map_raw_record(raw)
        except RecordMappingError as e:
            self.logger.warning(
                f"Job record is invalid: {e}",
                extra={
                    "event": "retrieval.get.invalid_record",
                    "missing_fields": e.missing_fields,
                },
            )
            return None

        if result.job.status != JobStatus.ACTIVE.value:
            self.logger.info(
                "Job is not active",
                extra={"event": "retrieval.get.inactive", "status": result.job.status},
            )
            return None

        return result.job

    def test_connection(self) -> bool:
        """Check that the store is configured and reachable by reading one record.

        Returns:
            True on success, False (logged) on any error
        """
        with log_context(operation="test_connection"):
            try:
                self.store.list_records(max_records=1)
            except StoreError as e:
                self.logger.error(
                    f"Record store connection failed: {e}",
                    extra={
                        "event": "retrieval.connection.failed",
                        "error_type": type(e).__name__,
                    },
                )
                return False
            except Exception as e:
                self.logger.error(
                    f"Unexpected error while testing connection: {e}",
                    exc_info=True,
                    extra={
                        "event": "retrieval.connection.failed",
                        "error_type": type(e).__name__,
                    },
                )
                return False

            self.logger.info(
                "Record store connection succeeded",
                extra={"event": "retrieval.connection.succeeded"},
            )
            return True
