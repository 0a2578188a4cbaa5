"""Admin use cases for account administration and maintenance."""

from .activate_account_use_case import ActivateAccountUseCase
from .deactivate_account_use_case import DeactivateAccountUseCase
from .set_password_use_case import SetPasswordUseCase
from .delete_account_use_case import DeleteAccountUseCase
from .cleanup_activity_logs_use_case import CleanupActivityLogsUseCase
from .dtos import AccountStatusResponse, DeleteAccountResponse, CleanupResponse

__all__ = [
    "ActivateAccountUseCase",
    "DeactivateAccountUseCase",
    "SetPasswordUseCase",
    "DeleteAccountUseCase",
    "CleanupActivityLogsUseCase",
    "AccountStatusResponse",
    "DeleteAccountResponse",
    "CleanupResponse",
]
