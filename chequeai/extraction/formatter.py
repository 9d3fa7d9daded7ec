"""
Presentation formatter — reconciled fields → display groups with placeholders.
"""
from __future__ import annotations

from chequeai.schemas import (
    BankDetails,
    BasicDetails,
    CheckDisplay,
    ReconciledCheck,
    SecurityFeatures,
)

NOT_AVAILABLE = "Not available"


def _or_placeholder(value: str) -> str:
    return value if value else NOT_AVAILABLE


def format_amount(amount_number: str, currency: str) -> str:
    # currency is appended even when the number is missing
    return f"{_or_placeholder(amount_number)} {currency}"


def format_for_display(info: ReconciledCheck) -> CheckDisplay:
    security = None
    if info.anti_fraud_features:
        security = SecurityFeatures(anti_fraud_features=info.anti_fraud_features)

    return CheckDisplay(
        basic_details=BasicDetails(
            payee_name=_or_placeholder(info.payee_name),
            amount=format_amount(info.amount_number, info.currency),
            amount_words=_or_placeholder(info.amount_words),
            cheque_date=_or_placeholder(info.cheque_date),
        ),
        bank_details=BankDetails(
            micr_code=_or_placeholder(info.micr_code),
            account_number=_or_placeholder(info.account_number),
            currency=info.currency,
        ),
        security_features=security,
    )
