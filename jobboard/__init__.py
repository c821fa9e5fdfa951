"""Job board core: ingestion and normalization of job postings from Airtable."""

__version__ = "0.1.0"
