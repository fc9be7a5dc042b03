"""
Auth service: user registration, login and profile persistence.

Every method is a single read-modify-write against the session handed to
the constructor; no state is kept between calls.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .auth import create_access_token, hash_password, verify_password
from .errors import DuplicateEmailError, InvalidCredentialsError, UserNotFoundError
from .models import Role, User
from .schemas import UserOut

logger = logging.getLogger(__name__)

# Fields a profile update may never touch
PROTECTED_FIELDS = frozenset({"email", "password"})
UPDATABLE_FIELDS = frozenset({"name", "phone", "avatar"})


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def create_user(
        self,
        email: str,
        password: str,
        name: str,
        role: Role,
        phone: Optional[str] = None,
    ) -> Tuple[UserOut, str]:
        """
        Register a new user and issue a token for it.

        Raises:
            DuplicateEmailError: If the email is already registered
        """
        if self._find_by_email(email) is not None:
            raise DuplicateEmailError()

        user = User(
            email=email,
            password=hash_password(password),
            name=name,
            phone=phone,
            role=role,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as exc:
            # Another request registered the same email in between
            self.db.rollback()
            raise DuplicateEmailError() from exc
        self.db.refresh(user)

        logger.info("Registered user: user_id=%s role=%s", user.id, user.role.value)
        return UserOut.model_validate(user), self._issue_token(user)

    def login_user(self, email: str, password: str) -> Tuple[UserOut, str]:
        """
        Check credentials and issue a token.

        Raises:
            UserNotFoundError: If no user has this email
            InvalidCredentialsError: If the password does not match
        """
        user = self._find_by_email(email)
        if user is None:
            logger.warning("Login failed: unknown email")
            raise UserNotFoundError()

        if not verify_password(password, user.password):
            logger.warning("Login failed: bad password for user_id=%s", user.id)
            raise InvalidCredentialsError()

        logger.info("Login: user_id=%s", user.id)
        return UserOut.model_validate(user), self._issue_token(user)

    def get_user_by_id(self, user_id: str) -> Optional[UserOut]:
        user = self.db.get(User, user_id)
        if user is None:
            return None
        return UserOut.model_validate(user)

    def update_user(self, user_id: str, fields: Dict[str, Any]) -> UserOut:
        """
        Apply a partial profile update. Email and password are discarded.

        Raises:
            UserNotFoundError: If the user does not exist
        """
        user = self.db.get(User, user_id)
        if user is None:
            raise UserNotFoundError()

        changes = {
            key: value
            for key, value in fields.items()
            if key not in PROTECTED_FIELDS and key in UPDATABLE_FIELDS
        }
        for key, value in changes.items():
            setattr(user, key, value)

        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info("Updated profile: user_id=%s fields=%s", user.id, sorted(changes))
        return UserOut.model_validate(user)

    def _find_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    @staticmethod
    def _issue_token(user: User) -> str:
        return create_access_token(user.id, user.role.value)
