"""Custom exceptions for record mapping."""

from typing import List, Optional


class RecordMappingError(Exception):
    """A raw record could not be turned into a valid Job.

    Raised for records missing required fields, or whose values fail Job
    validation. The retrieval service catches it at its boundary: a listing
    skips the record, a single lookup reports the job as absent.
    """

    def __init__(
        self,
        record_id: str,
        message: str,
        missing_fields: Optional[List[str]] = None,
    ) -> None:
        """Initialize mapping error.

        Args:
            record_id: ID of the record that failed to map
            message: Human-readable error message
            missing_fields: Required fields that were absent, if that was the cause
        """
        super().__init__(f"Record {record_id}: {message}")
        self.record_id = record_id
        self.missing_fields = missing_fields or []
