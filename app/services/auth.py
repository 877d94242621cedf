"""
JWT token and password utilities
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import HTTPException, status, Request
from app.config import settings

# Password hashing context (bcrypt, cost factor 12)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.PASSWORD_HASH_ROUNDS,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Check a password against its hash

    Args:
        plain_password: Plain text password
        hashed_password: Stored hash

    Returns:
        True if the password matches
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password

    Args:
        password: Plain text password

    Returns:
        bcrypt hash
    """
    return pwd_context.hash(password)


def create_access_token(admin_id: int, email: str, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed JWT for an administrator

    Args:
        admin_id: Administrator ID
        email: Administrator email
        expires_delta: Token lifetime

    Returns:
        JWT token
    """
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "id": admin_id,
        "email": email,
        "exp": expire,
        "iat": now
    }

    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """
    Decode and verify a JWT

    Signature, secret and expiry are all checked.

    Args:
        token: JWT token

    Returns:
        Token payload or None
    """
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None


def _bearer_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("authorization")
    if not auth_header:
        return None
    parts = auth_header.split(" ")
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


def get_current_admin(request: Request) -> dict:
    """
    Resolve the administrator from the Authorization header

    Tokens are stateless: nothing is stored server-side, so a token stays
    valid until it expires.

    Args:
        request: HTTP request

    Returns:
        Token claims (id, email)

    Raises:
        HTTPException: 401 if no token was sent, 403 if it does not verify
    """
    token = _bearer_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(token)
    if payload is None or payload.get("id") is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid or expired token"
        )

    admin = {"id": payload["id"], "email": payload.get("email")}
    request.state.admin = admin
    return admin
