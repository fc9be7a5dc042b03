from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
import re
import jwt

from .config import settings

# Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

_LIFETIME_UNITS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "w": 7 * 24 * 60 * 60,
}
_LIFETIME_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def parse_token_lifetime(value: str) -> timedelta:
    """
    Convert a lifetime such as "7d", "12h", "30m" or "3600" into a timedelta.

    A bare number is read as seconds.

    Raises:
        ValueError: If the value is not a recognised lifetime
    """
    match = _LIFETIME_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid token lifetime '{value}'")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _LIFETIME_UNITS[unit or "s"])


def create_access_token(user_id: str, role: str) -> str:
    now = datetime.now(timezone.utc)
    expire = now + parse_token_lifetime(settings.JWT_EXPIRES_IN)
    payload = {"id": user_id, "role": role, "iat": now, "exp": expire}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and expiry; raises jwt.PyJWTError on failure."""
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
