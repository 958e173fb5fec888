"""
Fetching the static restaurant document.

The document is either a JSON array of restaurant objects or an object
with a ``restaurants`` array. It can live on disk or behind HTTP.
"""

import json
from pathlib import Path
from typing import Any

import requests

from restaurant_directory.exceptions import DataSourceError
from restaurant_directory.logging_config import get_logger

logger = get_logger(__name__)


def unwrap_document(payload: Any) -> Any:
    """Return the record array from a parsed document."""
    if isinstance(payload, dict) and "restaurants" in payload:
        return payload["restaurants"]
    return payload


def read_document(path: str | Path) -> Any:
    """Read and parse a JSON document from disk."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DataSourceError(
            f"Could not read restaurant data from {path}: {e}",
            details={"source": str(path)},
        ) from e
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DataSourceError(
            f"Restaurant data at {path} is not valid JSON: {e}",
            details={"source": str(path)},
        ) from e


def fetch_document(url: str, timeout: float = 10.0, session: requests.Session | None = None) -> Any:
    """GET and parse a JSON document over HTTP. No retries."""
    http = session or requests
    try:
        resp = http.get(url, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
    except requests.RequestException as e:
        raise DataSourceError(
            f"Could not fetch restaurant data from {url}: {e}",
            details={"source": url},
        ) from e
    except ValueError as e:
        raise DataSourceError(
            f"Restaurant data at {url} is not valid JSON: {e}",
            details={"source": url},
        ) from e


def load_raw_collection(source: str, timeout: float = 10.0) -> Any:
    """
    Load the raw record collection from a file path or http(s) URL.

    Raises:
        DataSourceError: if the document cannot be fetched or parsed.
    """
    logger.info("Loading restaurant data from %s", source)
    if source.startswith(("http://", "https://")):
        payload = fetch_document(source, timeout=timeout)
    else:
        payload = read_document(source)
    return unwrap_document(payload)
