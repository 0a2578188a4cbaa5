"""
Register Use Case

Creates an account and opens its first session.
"""

import logging
from typing import Optional

from src.app.errors import ConflictError, ValidationError
from src.app.services.activity_log_service import ActivityLogService
from src.app.services.credential_store import CredentialStore
from src.app.services.token_issuer import TokenIssuer
from src.app.services.unit_of_work import UnitOfWork
from src.domain.base import utcnow
from src.domain.device import DeviceMeta
from src.domain.entities import ActivityAction
from .dtos import AuthResponse, RegisterCommand
from .token_pair import open_session

logger = logging.getLogger(__name__)


class RegisterUseCase:
    """
    Use case for account registration.

    Business Rules:
    - Email must not already be registered (compared lower-cased)
    - Password must satisfy the credential store's policy
    - New accounts are active and receive a session immediately
    - Tokens are returned only after the account and session are committed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_issuer: TokenIssuer,
        credential_store: Optional[CredentialStore] = None,
    ):
        self.uow = uow
        self.token_issuer = token_issuer
        self.credentials = credential_store or CredentialStore(uow)
        self.activity = ActivityLogService(uow)

    async def execute(
        self, command: RegisterCommand, device: Optional[DeviceMeta] = None
    ) -> AuthResponse:
        """
        Execute registration.

        Raises:
            ConflictError: email already registered (EMAIL_ALREADY_EXISTS)
            ValidationError: password or profile rejected by the credential store
        """
        async with self.uow:
            if await self.credentials.find_by_email(command.email) is not None:
                raise ConflictError(
                    "An account with this email already exists",
                    code="EMAIL_ALREADY_EXISTS",
                )

            result = await self.credentials.create(
                first_name=command.first_name,
                last_name=command.last_name,
                email=command.email,
                password=command.password,
            )
            if not result.succeeded:
                raise ValidationError("Registration failed", errors=result.errors)

            account = result.account
            issued = await open_session(
                self.uow, self.token_issuer, account, device, utcnow()
            )
            await self.uow.commit()

            logger.info("Registered account %s", account.id)
            await self.activity.record(
                account.id,
                ActivityAction.register,
                details=f"Account registered: {account.email}",
                device=device,
                entity_type="Account",
                entity_id=account.id,
            )

            return issued.to_response(account)
