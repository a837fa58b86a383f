"""Loading of parser documents.

This module provides functions for loading the JSON documents emitted by
the per-language parsers from files and URLs, and for turning them into
``Program`` instances.
"""

import json
from pathlib import Path
from typing import Any, Optional, Tuple, Union
from urllib.parse import urlparse

import requests

from .core.ast import Program, ProgramFormatError, program_from_dict
from .logging_config import get_logger

logger = get_logger(__name__)


class ProgramLoaderError(Exception):
    """Exception raised when a parser document cannot be loaded."""

    pass


def load_json_from_file(file_path: Union[str, Path]) -> Tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        ProgramLoaderError: If the file is missing, unreadable or not JSON.
    """
    file_path = Path(file_path)
    logger.debug("Loading parser document from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise ProgramLoaderError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info("Loaded parser document from %s", file_path)
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise ProgramLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e)
        raise ProgramLoaderError(f"Error reading file {file_path}: {e}") from e


def load_json_from_url(url: str, timeout: int = 30) -> Tuple[str, Any]:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        ProgramLoaderError: If the URL is invalid, the request fails, or the
            response isn't valid JSON.
    """
    logger.debug("Loading parser document from URL: %s", url)

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error("Invalid URL format: %s", url)
        raise ProgramLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if "application/json" not in content_type and not url.endswith(".json"):
            logger.warning("URL %s does not have JSON content type: %s", url, content_type)

        data = response.json()
        logger.info("Loaded parser document from %s", url)
        return url, data

    except requests.exceptions.Timeout as e:
        logger.error("Request timeout for URL: %s", url)
        raise ProgramLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error("Connection error for URL %s: %s", url, e)
        raise ProgramLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "unknown"
        logger.error("HTTP error %s for URL: %s", status, url)
        raise ProgramLoaderError(f"HTTP error {status} for URL: {url}") from e
    except ValueError as e:
        # requests' JSONDecodeError derives from ValueError
        logger.error("Invalid JSON response from URL %s: %s", url, e)
        raise ProgramLoaderError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.error("Request error for URL %s: %s", url, e)
        raise ProgramLoaderError(f"Request error for URL {url}: {e}") from e


def load_json(
    file_path: Optional[Union[str, Path]] = None,
    url: Optional[str] = None,
    timeout: int = 30,
) -> Tuple[str, Any]:
    """Load JSON data from either a file or URL.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        ProgramLoaderError: If neither or both parameters are provided, or loading fails.
    """
    if not file_path and not url:
        raise ProgramLoaderError("Either file_path or url must be provided")

    if file_path and url:
        raise ProgramLoaderError("Cannot specify both file_path and url")

    if file_path:
        return load_json_from_file(file_path)
    return load_json_from_url(url, timeout)


def load_program(
    file_path: Optional[Union[str, Path]] = None,
    url: Optional[str] = None,
    timeout: int = 30,
) -> Program:
    """Load a parser document and convert it into a Program.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Immutable Program.

    Raises:
        ProgramLoaderError: If the document cannot be loaded.
        ProgramFormatError: If the document is not a valid program.
    """
    source, data = load_json(file_path, url, timeout)
    try:
        program = program_from_dict(data)
    except ProgramFormatError as e:
        logger.error("Invalid program document %s: %s", source, e)
        raise

    logger.debug("Program from %s has %d top-level node(s)", source, len(program.body or ()))
    return program
