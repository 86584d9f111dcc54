"""Authentication service for JWT and password handling."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from finance_tracker.config import Settings
from finance_tracker.models.user import User

logger = logging.getLogger(__name__)

BEARER_SCHEME = "Bearer"


@dataclass(frozen=True)
class TokenIdentity:
    """Caller identity recovered from a verified token."""

    user_id: int
    email: str


class AuthService:
    """Password hashing and token issuance bound to one signing secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expiration_minutes: int = 10080,
        bcrypt_rounds: int = 12,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expiration = timedelta(minutes=expiration_minutes)
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=bcrypt_rounds
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expiration_minutes=settings.jwt_expiration_minutes,
            bcrypt_rounds=settings.bcrypt_rounds,
        )

    def hash_password(self, password: str) -> str:
        """Hash a password."""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash. Malformed hashes never match."""
        try:
            return self.pwd_context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            return False

    def issue_token(self, user_id: int, email: str) -> str:
        """Create a signed access token."""
        issued_at = datetime.now(UTC)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.expiration,
        }
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: str) -> TokenIdentity | None:
        """Decode and validate a token.

        Bad signature, expiry, malformed input and missing claims all give
        None, so callers cannot tell which check failed.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None

        subject = payload.get("sub")
        email = payload.get("email")
        if not isinstance(email, str) or not isinstance(subject, str) or not subject.isdecimal():
            return None
        return TokenIdentity(user_id=int(subject), email=email)

    def authenticate(self, db: Session, email: str, password: str) -> User | None:
        """Authenticate a user by email and password."""
        user = get_user_by_email(db, email)
        if not user:
            # Burn the same hashing cost so unknown emails are not faster
            self.pwd_context.dummy_verify()
            return None
        if not self.verify_password(password, user.password_hash):
            return None
        return user


def extract_bearer(header_value: str | None) -> str | None:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not header_value:
        return None
    parts = header_value.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME or not parts[1]:
        return None
    return parts[1]


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def create_user(db: Session, email: str, password_hash: str, name: str) -> User:
    """Create a new user from an already hashed password."""
    user = User(email=email, password_hash=password_hash, name=name)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Created user {user.id}")
    return user
