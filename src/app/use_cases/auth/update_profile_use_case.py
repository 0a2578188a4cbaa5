"""
Update Profile Use Case

Edits the descriptive fields of an account: names, department and avatar.
"""

import logging
from typing import Optional

from src.app.errors import NotFoundError, ValidationError
from src.app.services.activity_log_service import ActivityLogService
from src.app.services.credential_store import CredentialStore
from src.app.services.unit_of_work import UnitOfWork
from src.domain.device import DeviceMeta
from src.domain.entities import ActivityAction
from .dtos import AccountProfile, UpdateProfileCommand

logger = logging.getLogger(__name__)


class UpdateProfileUseCase:
    """
    Use case for profile editing, by the account itself or by an administrator.

    Business Rules:
    - Only fields set on the command change
    - First and last name cannot be blanked
    - An empty department or avatar clears it
    - Email, password and account flags are never touched here
    """

    def __init__(self, uow: UnitOfWork, credential_store: Optional[CredentialStore] = None):
        self.uow = uow
        self.credentials = credential_store or CredentialStore(uow)
        self.activity = ActivityLogService(uow)

    async def execute(
        self,
        account_id: str,
        command: UpdateProfileCommand,
        device: Optional[DeviceMeta] = None,
        by_admin: bool = False,
    ) -> AccountProfile:
        """
        Raises:
            NotFoundError: account does not exist (ACCOUNT_NOT_FOUND)
            ValidationError: a name was set to an empty value
        """
        changes = command.model_dump(exclude_unset=True)
        errors = []
        for name in ("first_name", "last_name"):
            if name in changes:
                value = (changes[name] or "").strip()
                if not value:
                    errors.append(f"{name.replace('_', ' ').capitalize()} is required")
                changes[name] = value
        for name in ("department", "avatar"):
            if name in changes:
                changes[name] = (changes[name] or "").strip() or None
        if errors:
            raise ValidationError("Profile update failed", errors=errors)

        async with self.uow:
            account = await self.credentials.find_by_id(account_id)
            if account is None:
                raise NotFoundError("Account not found", code="ACCOUNT_NOT_FOUND")

            if changes:
                await self.credentials.update_fields(account, **changes)
            profile = AccountProfile.from_account(account)
            await self.uow.commit()

            logger.info("Updated profile fields %s for account %s", sorted(changes), account_id)
            await self.activity.record(
                account_id,
                ActivityAction.update_profile,
                details=(
                    "Profile updated by administrator" if by_admin else "Profile updated"
                ),
                device=device,
                entity_type="Account",
                entity_id=account_id,
            )

            return profile
