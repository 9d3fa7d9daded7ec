"""
chequeai schemas — pydantic v2 models shared by the extraction pipeline and the API.
"""
from chequeai.schemas.auth import (
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    TokenResponse,
    UserEnvelope,
    UserMessageEnvelope,
    UserOut,
    UserStats,
    UserStatsEnvelope,
)
from chequeai.schemas.cheque import (
    BankDetails,
    BasicDetails,
    CheckDisplay,
    CheckEnvelope,
    CheckListEnvelope,
    CheckMessageEnvelope,
    CheckResponse,
    ExtractedData,
    ExtractedDataRequest,
    ExtractionResult,
    MessageResponse,
    ReconciledCheck,
    SecurityFeatures,
)

__all__ = [
    "BankDetails",
    "BasicDetails",
    "CheckDisplay",
    "CheckEnvelope",
    "CheckListEnvelope",
    "CheckMessageEnvelope",
    "CheckResponse",
    "ExtractedData",
    "ExtractedDataRequest",
    "ExtractionResult",
    "LoginRequest",
    "MessageResponse",
    "ProfileUpdate",
    "ReconciledCheck",
    "RegisterRequest",
    "SecurityFeatures",
    "TokenResponse",
    "UserEnvelope",
    "UserMessageEnvelope",
    "UserOut",
    "UserStats",
    "UserStatsEnvelope",
]
