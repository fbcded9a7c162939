"""Résumé loading and normalisation.

The résumé is one JSON file whose top-level sections are addressed by
JSON pointer paths (``/experience``, ``/skills`` …).  Each configured
pointer yields exactly one :class:`~resume_rag.models.ResumeDocument`
whose text is a readable flattening of the section.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from resume_rag.errors import LoadError
from resume_rag.models import DocumentMetadata, ResumeDocument

logger = logging.getLogger(__name__)

_INDENT = "  "


def load_resume(path: str | Path) -> Any:
    """Read and parse the résumé JSON at *path*.

    Raises
    ------
    LoadError
        If the file is missing, unreadable, or not valid JSON.
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise LoadError(f"Cannot read résumé file {str(path)!r}: {exc}") from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise LoadError(f"Malformed JSON in {str(path)!r}: {exc}") from exc


def _unescape(token: str) -> str:
    return token.replace("~1", "/").replace("~0", "~")


def resolve_pointer(data: Any, pointer: str) -> Any:
    """Return the value addressed by the JSON *pointer* inside *data*.

    Raises
    ------
    LoadError
        If the pointer is malformed or any path segment is absent.
    """
    if pointer == "":
        return data
    if not pointer.startswith("/"):
        raise LoadError(f"Invalid JSON pointer {pointer!r}: must start with '/'")

    current = data
    for token in (_unescape(t) for t in pointer[1:].split("/")):
        if isinstance(current, dict):
            if token not in current:
                raise LoadError(f"Section {pointer!r} not found in résumé (missing key {token!r})")
            current = current[token]
        elif isinstance(current, list):
            if not token.isdigit() or int(token) >= len(current):
                raise LoadError(f"Section {pointer!r} not found in résumé (bad index {token!r})")
            current = current[int(token)]
        else:
            raise LoadError(f"Section {pointer!r} not found in résumé")
    return current


def _is_scalar(value: Any) -> bool:
    return not isinstance(value, (dict, list))


def _scalar_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value)


def _flatten(value: Any, depth: int) -> list[str]:
    pad = _INDENT * depth
    if isinstance(value, dict):
        lines: list[str] = []
        for key, item in value.items():
            if _is_scalar(item):
                lines.append(f"{pad}{key}: {_scalar_text(item)}")
            else:
                lines.append(f"{pad}{key}:")
                lines.extend(_flatten(item, depth + 1))
        return lines
    if isinstance(value, list):
        lines = []
        for position, item in enumerate(value):
            if _is_scalar(item):
                lines.append(f"{pad}- {_scalar_text(item)}")
                continue
            # Blank line between structured entries so the chunker can
            # break on paragraph boundaries.
            if position:
                lines.append("")
            lines.extend(_flatten(item, depth))
        return lines
    return [f"{pad}{_scalar_text(value)}"]


def flatten_json(value: Any) -> str:
    """Render an arbitrary JSON value as indented ``key: value`` text.

    >>> flatten_json({"name": "Ada", "languages": ["en", "fr"]})
    'name: Ada\\nlanguages:\\n  - en\\n  - fr'
    """
    return "\n".join(_flatten(value, 0))


def normalize_sections(data: Any, pointers: list[str]) -> list[ResumeDocument]:
    """Produce one document per pointer, preserving pointer order.

    Parameters
    ----------
    data:
        Parsed résumé JSON.
    pointers:
        Ordered JSON pointer paths, one per section.

    Returns
    -------
    list[ResumeDocument]
        Documents tagged ``source="resume"`` and ``section=<pointer>``.
    """
    documents: list[ResumeDocument] = []
    for position, pointer in enumerate(pointers, 1):
        section = resolve_pointer(data, pointer)
        text = flatten_json(section)
        logger.info(
            "Processing document %d/%d from section: %s (%d chars)",
            position,
            len(pointers),
            pointer,
            len(text),
        )
        documents.append(
            ResumeDocument(text=text, metadata=DocumentMetadata(section=pointer))
        )
    return documents


def check_sections(data: Any, pointers: list[str]) -> None:
    """Raise :class:`LoadError` unless every pointer resolves in *data*."""
    for pointer in pointers:
        resolve_pointer(data, pointer)
