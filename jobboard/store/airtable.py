"""Airtable record store client.

Reads a single table through the Airtable REST API:

    GET {endpoint}/v0/{base_id}/{table}              list, paginated by ``offset``
    GET {endpoint}/v0/{base_id}/{table}/{record_id}  single record

Authentication is a personal access token sent as a bearer token.
"""

from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

from pydantic import ValidationError

from jobboard.domain.models import RawRecord
from jobboard.logging import get_logger

from .base import BaseRecordStore, SortSpec
from .exceptions import StoreConfigurationError, StoreResponseError

logger = get_logger(__name__, component="store")

DEFAULT_ENDPOINT_URL = "https://api.airtable.com"
MAX_PAGE_SIZE = 100


class AirtableStore(BaseRecordStore):
    """Record store backed by one Airtable table.

    Credentials may be missing at construction time; every call checks them
    and raises StoreConfigurationError when they are absent.
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        base_id: Optional[str] = None,
        table_name: Optional[str] = None,
        endpoint_url: str = DEFAULT_ENDPOINT_URL,
        page_size: int = MAX_PAGE_SIZE,
        max_records: int = 0,
        timeout: int = 30,
        user_agent: str = "JobBoard/1.0",
    ) -> None:
        """Initialize the Airtable client.

        Args:
            access_token: Personal access token
            base_id: ID of the base holding the table
            table_name: Table name or ID
            endpoint_url: API root, overridable for proxies and tests
            page_size: Records per page (1-100)
            max_records: Default cap on listed records (0 = unlimited)
            timeout: HTTP request timeout in seconds
            user_agent: User-Agent header for requests

        Raises:
            StoreConfigurationError: If page_size or max_records is out of range
        """
        super().__init__(timeout=timeout, user_agent=user_agent)

        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise StoreConfigurationError(
                f"page_size must be between 1 and {MAX_PAGE_SIZE}, got: {page_size}"
            )
        if max_records < 0:
            raise StoreConfigurationError(f"max_records cannot be negative, got: {max_records}")

        self.access_token = access_token
        self.base_id = base_id
        self.table_name = table_name
        self.endpoint_url = endpoint_url.rstrip("/")
        self.page_size = page_size
        self.max_records = max_records

    def list_records(
        self,
        filter_formula: Optional[str] = None,
        sort: Optional[SortSpec] = None,
        max_records: Optional[int] = None,
    ) -> List[RawRecord]:
        """List records from the table, following the ``offset`` cursor.

        Args:
            filter_formula: Airtable formula, e.g. ``{status} = 'active'``
            sort: (field, direction) pairs, direction ``asc`` or ``desc``
            max_records: Cap on returned records (None = configured default, 0 = unlimited)

        Returns:
            Records in the order Airtable returned them. Malformed records are
            skipped with a warning.

        Raises:
            StoreConfigurationError: If credentials are missing
            StoreHTTPError: On HTTP or transport errors
            StoreTimeoutError: On request timeout
            StoreResponseError: If the response body has no records list
        """
        url = self._table_url()
        limit = self.max_records if max_records is None else max_records
        base_params = self._list_params(filter_formula, sort, limit)

        records: List[RawRecord] = []
        offset: Optional[str] = None
        page_count = 0
        skipped_count = 0

        while True:
            params = list(base_params)
            if offset:
                params.append(("offset", offset))

            data = self._make_request(url, headers=self._auth_headers(), params=params)
            page_count += 1

            page = data.get("records")
            if not isinstance(page, list):
                raise StoreResponseError(f"Response from {url} has no 'records' list")
            for item in page:
                try:
                    records.append(self._parse_record(item))
                except StoreResponseError as e:
                    skipped_count += 1
                    logger.warning(
                        f"Skipping malformed record: {e}",
                        extra={"event": "store.record.skipped", "table": self.table_name},
                    )

            offset = data.get("offset")
            if not offset or (limit and len(records) >= limit):
                break

        if limit:
            records = records[:limit]

        logger.info(
            "Listed records",
            extra={
                "event": "store.list.completed",
                "table": self.table_name,
                "record_count": len(records),
                "page_count": page_count,
                "skipped_count": skipped_count,
            },
        )
        return records

    def find_record(self, record_id: str) -> Optional[RawRecord]:
        """Fetch one record by ID.

        Args:
            record_id: Airtable record ID (``rec...``)

        Returns:
            The record, or None if Airtable answers 404

        Raises:
            StoreConfigurationError: If credentials are missing
            StoreHTTPError: On HTTP errors other than 404, or transport errors
            StoreTimeoutError: On request timeout
            StoreResponseError: On a malformed response body
        """
        url = f"{self._table_url()}/{quote(record_id, safe='')}"
        data = self._make_request(url, headers=self._auth_headers(), not_found_ok=True)
        if data is None:
            return None
        return self._parse_record(data)

    def _table_url(self) -> str:
        """Build the table URL, checking that the store is configured."""
        missing = []
        if not self.access_token:
            missing.append("access token (AIRTABLE_ACCESS_TOKEN)")
        if not self.base_id:
            missing.append("base ID (AIRTABLE_BASE_ID)")
        if not self.table_name:
            missing.append("table name (AIRTABLE_TABLE_NAME)")
        if missing:
            raise StoreConfigurationError(
                f"Airtable store is not configured: missing {', '.join(missing)}"
            )
        return f"{self.endpoint_url}/v0/{quote(self.base_id, safe='')}/{quote(self.table_name, safe='')}"

    def _auth_headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.access_token}"}

    def _list_params(
        self,
        filter_formula: Optional[str],
        sort: Optional[SortSpec],
        limit: int,
    ) -> List[Tuple[str, Any]]:
        params: List[Tuple[str, Any]] = [("pageSize", self.page_size)]
        if filter_formula:
            params.append(("filterByFormula", filter_formula))
        for index, (field, direction) in enumerate(sort or ()):
            params.append((f"sort[{index}][field]", field))
            params.append((f"sort[{index}][direction]", direction))
        if limit:
            params.append(("maxRecords", limit))
        return params

    @staticmethod
    def _parse_record(item: Any) -> RawRecord:
        """Convert one Airtable record object into a RawRecord."""
        if not isinstance(item, dict):
            raise StoreResponseError(f"Expected a record object, got {type(item).__name__}")
        try:
            return RawRecord(
                id=item.get("id"),
                fields=item.get("fields") or {},
                created_time=item.get("createdTime"),
            )
        except ValidationError as e:
            raise StoreResponseError(f"Malformed record in response: {e}") from e
