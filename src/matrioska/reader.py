"""Reads matrioska documents from disk or text.

JSON is the native format; YAML files are accepted as well since YAML is a
superset that is friendlier to write by hand.
"""

import json
from pathlib import Path
from typing import Union

import yaml

from matrioska.models.base import JSONObject
from matrioska.observability.logging import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class DocumentReadError(ValueError):
    pass


def parse_document(text: str) -> JSONObject:
    """Parses a JSON document.

    Args:
        text: The JSON text.

    Returns:
        The top-level object.

    Raises:
        DocumentReadError: If the text is not valid JSON or its top level
            is not an object.
    """
    try:
        document = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentReadError(f"Invalid JSON document: {e}") from e
    return _ensure_object(document)


def read_document(path: Union[str, Path]) -> JSONObject:
    """Reads a JSON or YAML document from a file.

    Args:
        path: Path to a '.json', '.yaml' or '.yml' file. Any other suffix
            is read as JSON.

    Returns:
        The top-level object.

    Raises:
        DocumentReadError: If the file cannot be read or parsed, or its top
            level is not an object.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentReadError(f"Cannot read document {path}: {e}") from e

    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise DocumentReadError(f"Invalid YAML document {path}: {e}") from e
        document = _ensure_object(document)
    else:
        document = parse_document(text)

    logger.info(f"Loaded document from {path}")
    return document


def _ensure_object(document) -> JSONObject:
    if not isinstance(document, dict):
        raise DocumentReadError(
            f"Document must be an object, got {type(document).__name__}"
        )
    return document
