from chequeai.models.cheque import BankCheckModel
from chequeai.models.user import UserModel

__all__ = ["BankCheckModel", "UserModel"]
