# jwt_handler.py
from datetime import datetime, timedelta, timezone
from fastapi import HTTPException, status
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError
from skillgap.config import settings


def create_access_token(user_id: int, expires_delta: timedelta | None = None, **claims) -> str:
    """Mint a bearer token for a user.

    Production tokens come from the identity service; this is used by
    maintenance scripts and tests that share the same secret.
    """
    delta = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {**claims, "sub": str(user_id), "exp": datetime.now(timezone.utc) + delta}
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired") from exc
    except JWTError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token") from exc
