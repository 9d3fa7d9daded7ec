"""
chequeai read pipeline.

Orchestrates: recover JSON → reconcile fields → format for display.
Every read path (list, detail, CSV, PDF) goes through here.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from chequeai.extraction.formatter import NOT_AVAILABLE, format_for_display
from chequeai.extraction.json_recovery import parse_extracted_json
from chequeai.extraction.reconciler import DEFAULT_CURRENCY, SEMANTIC_FIELDS, reconcile
from chequeai.schemas import CheckDisplay, ReconciledCheck

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_CURRENCY",
    "NOT_AVAILABLE",
    "SEMANTIC_FIELDS",
    "display_check",
    "extract_check_information",
    "format_for_display",
    "parse_extracted_json",
    "reconcile",
]


def extract_check_information(record: Any) -> ReconciledCheck:
    """Resolve a stored cheque (ORM row or mapping) to one value per field."""
    if isinstance(record, Mapping):
        extracted_text = record.get("extracted_text")
    else:
        extracted_text = getattr(record, "extracted_text", None)

    parsed = parse_extracted_json(extracted_text)
    if parsed is None and extracted_text:
        logger.debug("Record %s: extracted_text holds no JSON object", _record_id(record))
    return reconcile(record, parsed)


def display_check(record: Any) -> CheckDisplay:
    return format_for_display(extract_check_information(record))


def _record_id(record: Any) -> Any:
    if isinstance(record, Mapping):
        return record.get("id")
    return getattr(record, "id", None)
