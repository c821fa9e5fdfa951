"""Command-line entry point for the job board core."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from jobboard.config.environment import EnvironmentConfig
from jobboard.config.exceptions import ConfigurationError
from jobboard.config.loader import load_config
from jobboard.config.models import AppConfig
from jobboard.domain.languages import get_display_name_from_code
from jobboard.domain.models import Job
from jobboard.logging import get_logger
from jobboard.logging.config import configure_logging
from jobboard.retrieval import JobRetrievalService
from jobboard.salary import StaticRateProvider, format_salary, sort_jobs_by_salary

logger = get_logger(__name__, component="cli")

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``jobboard`` command."""
    parser = argparse.ArgumentParser(
        prog="jobboard",
        description="Job board core - list and inspect job postings from the record store",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=LOG_LEVELS,
        help="Log level (overrides config and environment)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List active jobs")
    list_parser.add_argument(
        "--sort",
        choices=["date", "salary"],
        default="date",
        help="Order by posted date (newest first) or annualized salary (highest first)",
    )
    list_parser.add_argument(
        "--limit",
        type=int,
        default=0,
        help="Show at most this many jobs (default: all)",
    )
    list_parser.add_argument("--format", choices=["text", "json"], default="text")

    get_parser = subparsers.add_parser("get", help="Show one job by record ID")
    get_parser.add_argument("record_id", help="Record ID, e.g. recA1b2C3d4E5f6G7")
    get_parser.add_argument("--format", choices=["text", "json"], default="text")

    subparsers.add_parser("check", help="Check that the record store is reachable")

    return parser


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load configuration and resolve the effective log level.

    Log level priority: CLI > LOG_LEVEL environment variable > config file.

    Args:
        config_path: Path to configuration file, or None for the default lookup
        log_level_override: Log level from CLI

    Returns:
        Tuple of (AppConfig, EnvironmentConfig); env_config.log_level is always set

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    if log_level_override:
        env_config.log_level = log_level_override
    elif not env_config.log_level:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def job_to_dict(job: Job) -> Dict[str, Any]:
    """Serialize a job for JSON output, adding the formatted salary."""
    data = job.model_dump(mode="json")
    data["salary_display"] = format_salary(job.salary)
    return data


def format_job_line(job: Job) -> str:
    return f"{job.id}  {job.posted_date}  {job.title} @ {job.company}  [{format_salary(job.salary)}]"


def format_job_details(job: Job) -> str:
    """Render one job as a readable block of text."""
    location = job.workplace_type
    if job.remote_region:
        location = f"{location} ({job.remote_region})"
    place = ", ".join(part for part in (job.workplace_city, job.workplace_country) if part)
    if place:
        location = f"{location} - {place}"

    lines = [
        f"{job.title} @ {job.company}",
        f"ID:            {job.id}",
        f"Posted:        {job.posted_date}",
        f"Type:          {job.type}",
        f"Career level:  {', '.join(job.career_level)}",
        f"Workplace:     {location}",
        f"Salary:        {format_salary(job.salary)}",
        f"Visa:          {job.visa_sponsorship}",
    ]
    if job.timezone_requirements:
        lines.append(f"Timezone:      {job.timezone_requirements}")
    if job.languages:
        names = [get_display_name_from_code(code) for code in job.languages]
        lines.append(f"Languages:     {', '.join(names)}")
    lines.append(f"Apply:         {job.apply_url}")
    lines.extend(["", job.description])
    return "\n".join(lines)


def cmd_list(service: JobRetrievalService, app_config: AppConfig, args: argparse.Namespace) -> int:
    jobs: List[Job] = service.list_active_jobs()
    if args.sort == "salary":
        jobs = sort_jobs_by_salary(jobs, rate_provider=StaticRateProvider.from_config(app_config.salary))
    if args.limit > 0:
        jobs = jobs[: args.limit]

    if args.format == "json":
        print(json.dumps([job_to_dict(job) for job in jobs], indent=2, ensure_ascii=False))
    else:
        for job in jobs:
            print(format_job_line(job))

    logger.info(
        "Listed jobs",
        extra={"event": "cli.list.completed", "job_count": len(jobs), "sort": args.sort},
    )
    return 0


def cmd_get(service: JobRetrievalService, args: argparse.Namespace) -> int:
    job = service.get_job(args.record_id)
    if job is None:
        print(f"Job not found: {args.record_id}", file=sys.stderr)
        return 1

    if args.format == "json":
        print(json.dumps(job_to_dict(job), indent=2, ensure_ascii=False))
    else:
        print(format_job_details(job))
    return 0


def cmd_check(service: JobRetrievalService, env_config: EnvironmentConfig) -> int:
    missing = env_config.missing_credentials()
    if missing:
        print(f"Missing environment variables: {', '.join(missing)}", file=sys.stderr)
        return 1

    if service.test_connection():
        print("Record store connection OK")
        return 0
    print("Record store connection failed (see logs for details)", file=sys.stderr)
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the ``jobboard`` command.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    args = build_parser().parse_args(argv)

    try:
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        environment = os.environ.get("ENVIRONMENT", "local")
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=environment,
        )

        logger.debug(
            "Configuration loaded",
            extra={
                "event": "config.loaded",
                "command": args.command,
                "config_path": str(args.config) if args.config else None,
                "mapping_mode": app_config.mapping.mode,
                "has_credentials": env_config.has_credentials,
            },
        )

        service = JobRetrievalService.from_config(app_config, env_config)

        if args.command == "list":
            return cmd_list(service, app_config, args)
        if args.command == "get":
            return cmd_get(service, args)
        return cmd_check(service, env_config)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "cli.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
