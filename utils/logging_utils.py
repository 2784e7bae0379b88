"""
Logging setup shared by the API process and the provider clients.

Entrypoints call ``setup_logging`` once:

    from utils.logging_utils import setup_logging

    setup_logging(level="INFO", job_name="trailhead_api")

Modules grab a tagged adapter at import time:

    from utils.logging_utils import get_tagged_logger

    logger = get_tagged_logger(__name__, tag="nps_client")
    logger.info("Fetching alerts", extra={"park_code": "yose"})

Every record carries ``job_name`` and ``tag`` so provider traffic can be told
apart in a shared log stream.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any, Mapping, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


# ---------------------------------------------------------------------------
# Bootstrap config (records logged before setup_logging)
# ---------------------------------------------------------------------------

# Runs on import so early records still get timestamps and levels.
BOOTSTRAP_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
BOOTSTRAP_DATEFMT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    level=logging.INFO,
    format=BOOTSTRAP_FORMAT,
    datefmt=BOOTSTRAP_DATEFMT,
)


# ---------------------------------------------------------------------------
# Defaults for full configuration
# ---------------------------------------------------------------------------

DEFAULT_LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(job_name)s | %(tag)s | %(name)s | %(message)s"
)
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Query parameter names that carry provider credentials.
SECRET_PARAM_TOKENS = ("key", "token", "secret", "pass")

_CONFIGURED: bool = False


# ---------------------------------------------------------------------------
# Record filters
# ---------------------------------------------------------------------------

class MaxLevelFilter(logging.Filter):
    """Pass records at or below ``max_level``; keeps warnings off stdout."""

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        return record.levelno <= self.max_level


class EnsureTagFilter(logging.Filter):
    """
    Give every record a ``tag``.

    Records coming through ``get_tagged_logger`` already have one; plain
    loggers (uvicorn, urllib3) get the last segment of their logger name.
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "tag"):
            logger_name = getattr(record, "name", "")
            record.tag = logger_name.split(".")[-1] if logger_name else "-"
        return True


class JobNameFilter(logging.Filter):
    """Stamp the process-wide ``job_name`` onto records that lack one."""

    def __init__(self, job_name: Optional[str] = None) -> None:
        super().__init__()
        self._job_name = job_name or "-"

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "job_name"):
            record.job_name = self._job_name
        return True


# ---------------------------------------------------------------------------
# Config builder and setup
# ---------------------------------------------------------------------------


def build_logging_config(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    job_name: Optional[str] = None,
) -> Mapping[str, Any]:
    """
    Build a ``dictConfig`` mapping with split stdout/stderr handlers.

    DEBUG and INFO go to stdout, WARNING and above to stderr. Both handlers
    run the tag and job-name filters so the default format never fails on a
    missing attribute.

    Parameters
    ----------
    level:
        Root logger level, by name ("DEBUG", "INFO") or number.
    log_format:
        Formatter pattern; may use the ``job_name`` and ``tag`` fields.
    date_format:
        Formatter pattern for ``asctime``.
    job_name:
        Logical process name stamped on every record (e.g. "trailhead-insights").
        Missing names show as "-".

    Returns
    -------
    Mapping suitable for ``logging.config.dictConfig``.
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "ensure_tag": {"()": EnsureTagFilter},
            "job_name": {"()": JobNameFilter, "job_name": job_name},
            "stdout_max_info": {
                "()": MaxLevelFilter,
                "max_level": logging.INFO,
            },
        },
        "formatters": {
            "standard": {
                "format": log_format,
                "datefmt": date_format,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["ensure_tag", "job_name", "stdout_max_info"],
                "level": "DEBUG",
                "stream": "ext://sys.stdout",
            },
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["ensure_tag", "job_name"],
                "level": "WARNING",
                "stream": "ext://sys.stderr",
            },
        },
        "root": {
            "level": level,
            "handlers": ["stdout", "stderr"],
        },
    }


def setup_logging(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    job_name: Optional[str] = None,
    override_existing: bool = False,
) -> None:
    """
    Apply the logging configuration for this process.

    Parameters
    ----------
    level, log_format, date_format, job_name:
        Passed through to ``build_logging_config``.
    override_existing:
        Reapply the configuration even if this process already ran
        ``setup_logging``. Without it, repeated calls are no-ops, so both
        ``run_server.py`` and test helpers can call it.
    """
    global _CONFIGURED

    if _CONFIGURED and not override_existing:
        return

    logging.config.dictConfig(
        build_logging_config(
            level=level,
            log_format=log_format,
            date_format=date_format,
            job_name=job_name,
        )
    )
    _CONFIGURED = True


def get_tagged_logger(
    name: str,
    *,
    tag: Optional[str] = None,
) -> logging.LoggerAdapter:
    """
    Return a ``LoggerAdapter`` that adds ``tag`` to every record.

    ``tag`` defaults to the last dotted segment of ``name``, so
    ``trailhead.data_sources.nps_client`` logs as ``nps_client``.
    """
    base_logger = logging.getLogger(name)
    if tag is None:
        tag = name.split(".")[-1]
    return logging.LoggerAdapter(base_logger, {"tag": tag})


# ---------------------------------------------------------------------------
# Credential masking
# ---------------------------------------------------------------------------


def mask_secret_params(url: str) -> str:
    """Return ``url`` with credential-looking query values replaced by ``***``.

    Examples
    --------
    - https://developer.nps.gov/api/v1/parks?parkCode=yose&api_key=abc
      -> https://developer.nps.gov/api/v1/parks?parkCode=yose&api_key=%2A%2A%2A
    - https://nominatim.openstreetmap.org/search?q=Moab -> unchanged
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    if not parts.query:
        return url

    pairs = []
    changed = False
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if any(token in key.lower() for token in SECRET_PARAM_TOKENS):
            pairs.append((key, "***"))
            changed = True
        else:
            pairs.append((key, value))

    if not changed:
        return url
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(pairs), parts.fragment))
