"""Retrieval service: list active jobs and look up single jobs.

Example:
    from jobboard.config import load_config
    from jobboard.retrieval import JobRetrievalService

    app_config, env_config = load_config()
    service = JobRetrievalService.from_config(app_config, env_config)
    jobs = service.list_active_jobs()
"""

from .service import ACTIVE_FILTER, LISTING_SORT, JobRetrievalService, mappers_for_mode

__all__ = [
    "JobRetrievalService",
    "mappers_for_mode",
    "ACTIVE_FILTER",
    "LISTING_SORT",
]
