import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from passlib.exc import PasswordValueError

from app.core.config import Settings
from app.core.exceptions import InvalidCredential, ValidationError
from app.schemas.auth_schema import TokenClaims

INVALID_TOKEN = "Invalid or expired token"


class PasswordHasher:
    """Salted bcrypt hashing; the salt and cost live inside the digest."""

    def __init__(self, rounds: int = 10):
        self.pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        try:
            return self.pwd_context.hash(password)
        except PasswordValueError as e:
            # bcrypt rejects NUL bytes
            raise ValidationError("Password contains unsupported characters") from e

    def verify(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        if not plain_password or not hashed_password:
            return False
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            return False

    def dummy_verify(self) -> None:
        self.pwd_context.dummy_verify()


class TokenIssuer:
    """HS256 session tokens carrying ``id``, ``email``, ``iat`` and ``exp``."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_delta: timedelta = timedelta(hours=1)):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, user_id: int, email: str, issued_at: Optional[datetime] = None) -> str:
        issued_at = issued_at or datetime.now(timezone.utc)
        to_encode = {
            "id": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        # every failure below is reported identically
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
            return TokenClaims(
                user_id=int(payload["id"]),
                email=payload["email"],
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (JWTError, KeyError, TypeError, ValueError) as e:
            logging.info(f"Rejected session token: {type(e).__name__}")
            raise InvalidCredential(INVALID_TOKEN) from e


def build_password_hasher(settings: Settings) -> PasswordHasher:
    return PasswordHasher(rounds=settings.BCRYPT_ROUNDS)


def build_token_issuer(settings: Settings) -> TokenIssuer:
    return TokenIssuer(
        secret=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
