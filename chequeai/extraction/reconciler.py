"""
Field reconciler.

A cheque's fields live in two places that can disagree: the structured
columns and the JSON copy inside ``extracted_text``. For display, the column
wins when it is non‑empty, then the JSON value, then the empty string.
Currency comes from ``currency_name`` only, defaulting to USD.
"""
from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, Optional

from chequeai.schemas import ReconciledCheck

DEFAULT_CURRENCY = "USD"

SEMANTIC_FIELDS: tuple[str, ...] = (
    "micr_code",
    "cheque_date",
    "amount_number",
    "amount_words",
    "payee_name",
    "account_number",
    "anti_fraud_features",
)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return ", ".join(_as_text(v) for v in value if _has_value(v))
    if isinstance(value, (bool, dict)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _has_value(value: Any) -> bool:
    return value is not None and _as_text(value).strip() != ""


def _column(record: Any, name: str) -> Any:
    if record is None:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def resolve_field(record: Any, parsed: Optional[Mapping[str, Any]], name: str) -> str:
    """Column value if non‑empty, else JSON value if non‑empty, else ``""``."""
    column_value = _column(record, name)
    if _has_value(column_value):
        return _as_text(column_value)

    if parsed is not None:
        json_value = parsed.get(name)
        if _has_value(json_value):
            return _as_text(json_value)

    return ""


def resolve_currency(record: Any) -> str:
    currency = _column(record, "currency_name")
    if _has_value(currency):
        return _as_text(currency)
    return DEFAULT_CURRENCY


def reconcile(record: Any, parsed: Optional[Mapping[str, Any]]) -> ReconciledCheck:
    """Resolve every semantic field of *record* against its recovered JSON.

    *record* may be an ORM row or a plain mapping. Pure: same inputs, same
    output.
    """
    values = {name: resolve_field(record, parsed, name) for name in SEMANTIC_FIELDS}
    return ReconciledCheck(**values, currency=resolve_currency(record))
