"""
Credential Store

Owns account records, password hashes and account flags. Password hashing
is delegated to bcrypt; this module only decides policy.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

import bcrypt

from config import ApplicationConfig
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.entities import Account

# Fields an update_fields call may touch; credentials and identity are excluded
UPDATABLE_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "avatar",
        "department",
        "is_active",
        "two_factor_enabled",
        "last_login_at",
        "email_confirmed_at",
        "external_provider",
        "external_id",
        "is_external_account",
    }
)

# bcrypt only reads the first 72 bytes and newer releases reject anything longer
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass
class CredentialResult:
    """Outcome of a credential-store mutation with its structured error list"""

    succeeded: bool
    errors: List[str] = field(default_factory=list)
    account: Optional[Account] = None

    @classmethod
    def ok(cls, account: Account) -> "CredentialResult":
        return cls(succeeded=True, account=account)

    @classmethod
    def failed(cls, *errors: str) -> "CredentialResult":
        return cls(succeeded=False, errors=list(errors))


class CredentialStore:
    """
    Identity-management collaborator used by the auth use cases.

    Business Rules:
    - Emails are compared and stored lower-cased
    - Passwords: min length (configurable), at least one digit,
      one lowercase and one uppercase letter
    - check_password always runs a bcrypt comparison, even for unknown
      accounts, to keep response time independent of account existence
    """

    def __init__(
        self,
        uow: UnitOfWork,
        rounds: int = ApplicationConfig.BCRYPT_ROUNDS,
        min_password_length: int = ApplicationConfig.PASSWORD_MIN_LENGTH,
    ):
        self.uow = uow
        self.rounds = rounds
        self.min_password_length = min_password_length
        self._dummy_hash: Optional[bytes] = None

    async def find_by_email(self, email: str) -> Optional[Account]:
        return await self.uow.accounts.get_by_email(normalize_email(email))

    async def find_by_id(self, account_id: str) -> Optional[Account]:
        return await self.uow.accounts.get_by_id(account_id)

    def validate_password(self, password: str) -> List[str]:
        errors = []
        if len(password) < self.min_password_length:
            errors.append(
                f"Password must be at least {self.min_password_length} characters long"
            )
        if not any(ch.isdigit() for ch in password):
            errors.append("Password must contain at least one digit")
        if not any(ch.islower() for ch in password):
            errors.append("Password must contain at least one lowercase letter")
        if not any(ch.isupper() for ch in password):
            errors.append("Password must contain at least one uppercase letter")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            errors.append(f"Password must be at most {MAX_PASSWORD_BYTES} bytes long")
        return errors

    def hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(self.rounds)).decode("utf-8")

    async def create(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        **fields: Any,
    ) -> CredentialResult:
        """Create an active account with a hashed password"""
        email = normalize_email(email)
        errors = []
        if not first_name.strip():
            errors.append("First name is required")
        if not last_name.strip():
            errors.append("Last name is required")
        if "@" not in email:
            errors.append("Email address is invalid")
        errors.extend(self.validate_password(password))
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            errors.append(f"Unknown account fields: {', '.join(sorted(unknown))}")
        if errors:
            return CredentialResult.failed(*errors)

        if await self.uow.accounts.get_by_email(email) is not None:
            return CredentialResult.failed("Email is already registered")

        account = Account(
            email=email,
            password_hash=self.hash_password(password),
            first_name=first_name.strip(),
            last_name=last_name.strip(),
            **fields,
        )
        account = await self.uow.accounts.create(account)
        return CredentialResult.ok(account)

    async def update_fields(self, account: Account, **fields: Any) -> CredentialResult:
        """Update profile/flag fields; stamps updated_at"""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            return CredentialResult.failed(
                f"Unknown account fields: {', '.join(sorted(unknown))}"
            )

        for name, value in fields.items():
            setattr(account, name, value)
        account.updated_at = utcnow()
        account = await self.uow.accounts.update(account)
        return CredentialResult.ok(account)

    def check_password(self, account: Optional[Account], password: str) -> bool:
        """Constant-time password verification"""
        secret = password.encode("utf-8")
        too_long = len(secret) > MAX_PASSWORD_BYTES
        if account is None or not account.password_hash or too_long:
            # Hash check against a dummy value keeps timing uniform
            if self._dummy_hash is None:
                self._dummy_hash = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(self.rounds))
            bcrypt.checkpw(secret[:MAX_PASSWORD_BYTES], self._dummy_hash)
            return False

        try:
            return bcrypt.checkpw(secret, account.password_hash.encode("utf-8"))
        except ValueError:
            # Stored hash is not a valid bcrypt hash
            return False

    async def change_password(
        self, account: Account, current_password: str, new_password: str
    ) -> CredentialResult:
        """Verify the current password, then replace it"""
        if not self.check_password(account, current_password):
            return CredentialResult.failed("Incorrect password")
        if current_password == new_password:
            return CredentialResult.failed("New password must differ from the current password")
        return await self.set_password(account, new_password)

    async def set_password(self, account: Account, new_password: str) -> CredentialResult:
        """Replace the password without verifying the old one (admin reset)"""
        errors = self.validate_password(new_password)
        if errors:
            return CredentialResult.failed(*errors)

        account.password_hash = self.hash_password(new_password)
        account.updated_at = utcnow()
        account = await self.uow.accounts.update(account)
        return CredentialResult.ok(account)
