from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.app.services.token_issuer import AccessTokenClaims, TokenIssuer
from src.domain.device import DeviceMeta

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)

token_issuer = TokenIssuer.from_config(ApplicationConfig)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_issuer() -> TokenIssuer:
    return token_issuer


def get_device_meta(request: Request) -> DeviceMeta:
    """IP address (first X-Forwarded-For hop if present) and User-Agent of the caller"""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip_address = forwarded.split(",")[0].strip()
    else:
        ip_address = request.client.host if request.client else None
    return DeviceMeta.from_headers(ip_address, request.headers.get("user-agent"))


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AccessTokenClaims:
    """
    Dependency to extract and verify the access token from the Authorization header.

    Returns:
        Validated access token claims

    Raises:
        ClientError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise ClientError(
            "UNAUTHORIZED",
            "Missing bearer token",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    claims = issuer.decode_claims(credentials.credentials)
    if claims is None:
        raise ClientError(
            "INVALID_TOKEN",
            "Invalid or expired token",
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return claims
