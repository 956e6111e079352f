"""API document loading from local files and URLs."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import requests
import yaml
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import SchemaError

REMOTE_SCHEMES: tuple[str, ...] = ("http://", "https://")


def _parse(content: str, source: str, *, as_json: bool) -> dict[str, Any]:
    try:
        data = json.loads(content) if as_json else yaml.safe_load(content)
    except json.JSONDecodeError as e:
        raise SchemaError(f"Invalid JSON: {e}", source) from e
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML: {e}", source) from e

    if not isinstance(data, dict):
        raise SchemaError("Schema root must be a mapping", source)
    return data


def load_schema(schema_path: Path) -> dict[str, Any]:
    """Load an API document from a YAML or JSON file.

    Files with a ``.json`` suffix are parsed as JSON, everything else as
    YAML (which also accepts most JSON).

    Raises:
        SchemaError: If the file cannot be read or parsed.
    """
    try:
        content = schema_path.read_text(encoding="utf-8")
    except OSError as e:
        raise SchemaError(f"Failed to read schema file: {e}", str(schema_path)) from e

    return _parse(content, str(schema_path), as_json=schema_path.suffix.lower() == ".json")


def _session(retries: int) -> requests.Session:
    session = requests.Session()
    retry = Retry(total=retries, backoff_factor=0.5, status_forcelist=(500, 502, 503, 504))
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch_schema(url: str, *, timeout: float = 10.0, retries: int = 3) -> dict[str, Any]:
    """Fetch a remote API document.

    Uses urllib3 Retry via requests.adapters.HTTPAdapter.

    Raises:
        SchemaError: If the request fails or the body is not a mapping.
    """
    try:
        resp = _session(retries).get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise SchemaError(f"Failed to fetch schema: {e}", url) from e

    content_type = resp.headers.get("Content-Type", "")
    return _parse(resp.text, url, as_json="json" in content_type)


def is_remote(src: str) -> bool:
    return src.startswith(REMOTE_SCHEMES)


def load_document(src: str | Path) -> dict[str, Any]:
    """Load an API document from a URL or a local path."""
    if isinstance(src, str) and is_remote(src):
        return fetch_schema(src)
    return load_schema(Path(src))

