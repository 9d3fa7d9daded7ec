"""
Cheque schemas — reconciled fields, display groups, API envelopes.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer


# ---------------------------------------------------------------------------
# Reconciliation output
# ---------------------------------------------------------------------------

class ReconciledCheck(BaseModel):
    """One resolved value per semantic field; empty string when no source has one."""
    micr_code: str = ""
    cheque_date: str = ""
    amount_number: str = ""
    amount_words: str = ""
    payee_name: str = ""
    account_number: str = ""
    anti_fraud_features: str = ""
    currency: str = "USD"


# ---------------------------------------------------------------------------
# Display groups
# ---------------------------------------------------------------------------

class BasicDetails(BaseModel):
    payee_name: str
    amount: str
    amount_words: str
    cheque_date: str


class BankDetails(BaseModel):
    micr_code: str
    account_number: str
    currency: str


class SecurityFeatures(BaseModel):
    anti_fraud_features: str


class CheckDisplay(BaseModel):
    """Grouped, placeholder-filled view of a cheque.

    ``securityFeatures`` is left out entirely when there is nothing to show.
    """
    model_config = ConfigDict(populate_by_name=True)

    basic_details: BasicDetails = Field(..., alias="basicDetails")
    bank_details: BankDetails = Field(..., alias="bankDetails")
    security_features: Optional[SecurityFeatures] = Field(default=None, alias="securityFeatures")

    @model_serializer(mode="wrap")
    def _omit_missing_security(self, handler):
        data = handler(self)
        if self.security_features is None:
            data.pop("securityFeatures", None)
            data.pop("security_features", None)
        return data


# ---------------------------------------------------------------------------
# API request / response envelopes
# ---------------------------------------------------------------------------

class ExtractedData(BaseModel):
    """Manually supplied field values.

    Keys beyond the cheque fields are kept so they reach ``extracted_text``.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="allow")

    micr_code: Optional[str] = None
    cheque_date: Optional[str] = None
    amount_number: Optional[str] = None
    amount_words: Optional[str] = None
    payee_name: Optional[str] = None
    account_number: Optional[str] = None
    anti_fraud_features: Optional[str] = None


class ExtractionResult(ExtractedData):
    """Fields read from a cheque image plus the raw model reply."""
    currency_name: str = "USD"
    extracted_text: str = ""


class ExtractedDataRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    extracted_data: Optional[ExtractedData] = Field(default=None, alias="extractedData")


class CheckResponse(BaseModel):
    id: int
    user_id: int
    micr_code: Optional[str] = None
    cheque_date: Optional[str] = None
    amount_number: Optional[str] = None
    amount_words: Optional[str] = None
    currency_name: Optional[str] = None
    payee_name: Optional[str] = None
    account_number: Optional[str] = None
    anti_fraud_features: Optional[str] = None
    image_filename: Optional[str] = None
    extracted_text: Optional[str] = None
    created_at: datetime
    display: CheckDisplay


class CheckEnvelope(BaseModel):
    check: CheckResponse


class CheckMessageEnvelope(BaseModel):
    message: str
    check: CheckResponse


class CheckListEnvelope(BaseModel):
    checks: list[CheckResponse] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str
    details: Optional[Any] = None
