"""Shared ``requests`` plumbing for the provider clients.

Retries and timeouts belong here, at the transport, so the services above
never retry on their own.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, TypeVar

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from trailhead.errors import ProviderFailure
from utils.logging_utils import get_tagged_logger, mask_secret_params

logger = get_tagged_logger(__name__, tag="http_session")

RETRY_STATUS_CODES = (429, 500, 502, 503, 504)

# What reading an unexpected JSON shape raises: missing keys, wrong container types, bad numbers.
MALFORMED_PAYLOAD_ERRORS = (AttributeError, KeyError, TypeError, ValueError)

T = TypeVar("T")


def _masked_error(exc: requests.exceptions.RequestException) -> str:
    """Error text with any request URL credentials masked; requests embeds the full URL."""
    text = str(exc)
    for source in (exc.request, exc.response):
        url = getattr(source, "url", None)
        if url:
            text = text.replace(url, mask_secret_params(url))
    return text


def build_session(retries: int = 2, backoff_factor: float = 0.2) -> requests.Session:
    """Return a session that retries idempotent GETs on transient failures."""
    retry = Retry(
        total=retries,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUS_CODES,
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    session = requests.Session()
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def fetch_json(
    session: requests.Session,
    url: str,
    *,
    provider: str,
    lookup: str,
    params: Optional[Mapping[str, Any]] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = 10.0,
) -> Any:
    """GET ``url`` and decode JSON, turning every failure into ``ProviderFailure``."""
    try:
        resp = session.get(url, params=params, headers=headers, timeout=timeout)
        resp.raise_for_status()
        data = resp.json()
    except requests.exceptions.RequestException as exc:
        detail = _masked_error(exc)
        logger.warning(
            "Provider request failed",
            extra={"provider": provider, "lookup": lookup, "url": mask_secret_params(url), "error": detail},
        )
        raise ProviderFailure(provider, lookup, detail) from exc
    except ValueError as exc:
        logger.warning(
            "Provider returned a non-JSON body",
            extra={"provider": provider, "lookup": lookup, "error": str(exc)},
        )
        raise ProviderFailure(provider, lookup, "response was not valid JSON") from exc

    logger.debug("Provider request ok", extra={"provider": provider, "lookup": lookup})
    return data


def to_float(value: Any) -> Optional[float]:
    """Parse provider numbers that may arrive as strings; blanks become None."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    return float(value)


def to_int(value: Any) -> int:
    """Parse provider counts that may arrive as strings; blanks become 0."""
    parsed = to_float(value)
    return int(parsed) if parsed is not None else 0


@contextmanager
def reading_payload(provider: str, lookup: str, what: str = "payload") -> Iterator[None]:
    """Turn a shape error raised while walking a decoded payload into ``ProviderFailure``.

    Every walk over provider JSON, including filters that run before the
    record mappers, belongs inside this block.
    """
    try:
        yield
    except MALFORMED_PAYLOAD_ERRORS as exc:
        logger.warning(
            "Provider returned a malformed payload",
            extra={"provider": provider, "lookup": lookup, "error": f"{type(exc).__name__}: {exc}"},
        )
        raise ProviderFailure(provider, lookup, f"malformed {what} ({exc})") from exc


def parse_items(
    provider: str,
    lookup: str,
    items: Iterable[Dict[str, Any]],
    parse: Callable[[Dict[str, Any]], T],
) -> List[T]:
    """Apply ``parse`` to each payload item; one malformed item fails the whole lookup."""
    with reading_payload(provider, lookup):
        return [parse(item) for item in items]
