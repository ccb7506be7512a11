"""Reading descriptor documents from disk or over HTTP.

A descriptor document is the JSON rendering of a FileDescriptorProto,
a FileDescriptorSet or a CodeGeneratorRequest. Whatever the shape, the
top level is always a JSON object; anything else is rejected here so
that callers only ever see a dict.
"""

import json
from pathlib import Path
from typing import Any, Dict
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

Document = Dict[str, Any]


class DescriptorLoaderError(Exception):
    """A descriptor document could not be read, fetched or parsed."""

    pass


def _require_object(data: Any, source: str) -> Document:
    if not isinstance(data, dict):
        logger.error("Descriptor from %s is a %s, not an object", source, type(data).__name__)
        raise DescriptorLoaderError(
            f"Descriptor document from {source} must be a JSON object, "
            f"got {type(data).__name__}"
        )
    return data


def load_descriptor_from_file(file_path: str | Path) -> Document:
    """Read a descriptor document from a local JSON file.

    Raises:
        FileNotFoundError: The path does not exist.
        DescriptorLoaderError: The file is unreadable, not JSON, or not
            a JSON object.
    """
    file_path = Path(file_path)
    logger.debug("Reading descriptor file %s", file_path)

    if not file_path.exists():
        raise FileNotFoundError(f"Descriptor file not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        # protoc's binary descriptor sets often end in .pb; say so early
        logger.warning("%s does not end in .json; expecting a JSON descriptor", file_path)

    try:
        text = file_path.read_text(encoding="utf-8")
    except OSError as e:
        raise DescriptorLoaderError(f"Cannot read descriptor file {file_path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DescriptorLoaderError(f"Invalid JSON in descriptor file {file_path}: {e}") from e

    logger.info("Read descriptor file %s", file_path)
    return _require_object(data, str(file_path))


def load_descriptor_from_url(url: str, timeout: int = 30) -> Document:
    """Fetch a descriptor document over HTTP(S).

    Args:
        url: Absolute URL of the JSON descriptor.
        timeout: Seconds to wait for the server.

    Raises:
        DescriptorLoaderError: The URL is malformed, the request fails, or
            the body is not a JSON object.
    """
    parsed = urlparse(url)
    if not (parsed.scheme and parsed.netloc):
        raise DescriptorLoaderError(f"Invalid URL: {url}")

    logger.debug("Fetching descriptor from %s", url)
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        raise DescriptorLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise DescriptorLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise DescriptorLoaderError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except ValueError as e:
        # requests raises a ValueError subclass for undecodable bodies
        raise DescriptorLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        raise DescriptorLoaderError(f"Request error for URL {url}: {e}") from e

    logger.info("Fetched descriptor from %s", url)
    return _require_object(data, url)


def load_descriptor(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> Document:
    """Load a descriptor document from exactly one of a path or a URL."""
    if bool(file_path) == bool(url):
        raise DescriptorLoaderError("Give exactly one of file_path or url")

    if file_path:
        return load_descriptor_from_file(file_path)
    return load_descriptor_from_url(url, timeout)
