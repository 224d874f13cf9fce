import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from kgl.core.config import get_settings
from kgl.core.errors import AuthError, AuthorizationError
from kgl.schemas.user import TokenData

logger = logging.getLogger("kgl.auth")

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error is off so a missing token goes through the same AuthError path as a bad one
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/users/token", auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_access_token(user_id: int, role: str, expires_delta: Optional[timedelta] = None) -> str:
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {"sub": str(user_id), "role": role, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[TokenData]:
    """Return the identity carried by a token, or None if it is invalid or expired."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        return TokenData(user_id=int(payload["sub"]), role=payload["role"])
    except (JWTError, KeyError, ValueError, ValidationError):
        return None


async def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> TokenData:
    if not token:
        raise AuthError("Not authenticated", "Missing bearer token")
    identity = decode_access_token(token)
    if identity is None:
        logger.info("Rejected invalid or expired token")
        raise AuthError(details="Invalid or expired token")
    return identity


def has_role(identity: TokenData, *roles: str) -> bool:
    return identity.role in roles


def require_role(*roles: str):
    async def checker(identity: TokenData = Depends(get_current_user)) -> TokenData:
        if not has_role(identity, *roles):
            logger.warning("User %s (%s) denied, requires %s", identity.user_id, identity.role, "/".join(roles))
            raise AuthorizationError(
                f"{' or '.join(roles)} access required",
                f"Role {identity.role} may not perform this operation",
            )
        return identity

    return checker


is_manager = require_role("Manager")
is_sales_agent = require_role("SalesAgent")
is_staff = require_role("Manager", "SalesAgent")
