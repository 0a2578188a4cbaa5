"""
Token Issuer

Mints and validates the two credential types:
- access tokens: short-lived, signed, self-contained JWTs (HS256)
- refresh tokens: long-lived, opaque random values whose only meaning is as a
  lookup key into the session store
"""

import base64
import hashlib
import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Optional, Tuple

from jose import JWTError, jwt
from pydantic import BaseModel
from pydantic import ValidationError as ClaimsValidationError

from config import ApplicationConfig
from src.domain.base import utcnow
from src.domain.entities import Account

logger = logging.getLogger(__name__)

REFRESH_TOKEN_BYTES = 64


def hash_refresh_token(refresh_token: str) -> str:
    """SHA-256 digest used to store and look up refresh tokens"""
    return hashlib.sha256(refresh_token.encode()).hexdigest()


def token_fingerprint(refresh_token: str) -> str:
    """Short, non-reversible identifier safe to write to logs"""
    return hash_refresh_token(refresh_token)[:12]


class AccessTokenClaims(BaseModel):
    """Validated claim set of an access token"""

    sub: str
    account_id: str
    email: str
    name: str
    first_name: str
    last_name: str
    department: Optional[str] = None
    is_active: bool
    iss: str
    aud: str
    iat: int
    exp: int


class TokenIssuer:
    """Creates and validates access tokens, generates refresh tokens"""

    def __init__(
        self,
        secret: str,
        issuer: str,
        audience: str,
        access_token_lifetime: timedelta = timedelta(minutes=60),
        refresh_token_lifetime: timedelta = timedelta(days=30),
        algorithm: str = "HS256",
    ):
        self.secret = secret
        self.issuer = issuer
        self.audience = audience
        self.access_token_lifetime = access_token_lifetime
        self.refresh_token_lifetime = refresh_token_lifetime
        self.algorithm = algorithm

    @classmethod
    def from_config(cls, config=ApplicationConfig) -> "TokenIssuer":
        return cls(
            secret=config.JWT_SECRET,
            issuer=config.JWT_ISSUER,
            audience=config.JWT_AUDIENCE,
            access_token_lifetime=timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_token_lifetime=timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS),
            algorithm=config.JWT_ALGORITHM,
        )

    def create_access_token(
        self, account: Account, expires_delta: Optional[timedelta] = None
    ) -> Tuple[str, datetime]:
        """
        Create a signed access token for an account.

        Args:
            account: Account the token is bound to
            expires_delta: Lifetime override (defaults to the configured lifetime)

        Returns:
            Tuple of (JWT string, naive UTC expiry instant)
        """
        now = datetime.now(UTC)
        expires_at = now + (expires_delta if expires_delta is not None else self.access_token_lifetime)
        payload = {
            "sub": account.id,
            "account_id": account.id,
            "email": account.email,
            "name": account.full_name,
            "first_name": account.first_name,
            "last_name": account.last_name,
            "is_active": account.is_active,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": expires_at,
        }
        if account.department:
            payload["department"] = account.department

        token = jwt.encode(payload, self.secret, algorithm=self.algorithm)
        return token, expires_at.replace(tzinfo=None)

    def decode_claims(self, token: str) -> Optional[AccessTokenClaims]:
        """
        Verify and decode an access token.

        Signature, expiry, issuer and audience failures and malformed claim
        sets all collapse to None.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
            )
            return AccessTokenClaims(**payload)
        except (JWTError, ClaimsValidationError) as exc:
            logger.debug("Rejected access token: %s", exc.__class__.__name__)
            return None

    def validate(self, token: str) -> bool:
        return self.decode_claims(token) is not None

    def get_account_id(self, token: str) -> Optional[str]:
        claims = self.decode_claims(token)
        return claims.account_id if claims else None

    def generate_refresh_token(self) -> str:
        """64 random bytes, base64-encoded; carries no claims"""
        return base64.b64encode(secrets.token_bytes(REFRESH_TOKEN_BYTES)).decode("ascii")

    def refresh_token_expiry(self, now: Optional[datetime] = None) -> datetime:
        return (now or utcnow()) + self.refresh_token_lifetime
