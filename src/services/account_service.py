"""Account service — user record lifecycle and authentication.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
Persistence faults (StorageError) propagate untouched.
"""

import logging

from domain.model.errors import DuplicateError, InvalidCredentialsError, NotFoundError
from domain.model.user import DEFAULT_ROLE, UPDATABLE_FIELDS, User, public_view
from port.user_repository import UserRepository
from services import credentials

logger = logging.getLogger(__name__)


class AccountService:
    """Owns the user lifecycle: create, look up, update, re-key, delete."""

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def create_account(
        self,
        email: str,
        password: str,
        first_name: str | None = None,
        last_name: str | None = None,
        role: str | None = None,
    ) -> User:
        """Register a new user.

        The existence check and the insert are two separate steps; the
        unique email index is what closes the race between them.

        Raises:
            DuplicateError: email already registered
        """
        if self.repo.get_by_email(email):
            raise DuplicateError()

        user = self.repo.create(
            email=email,
            password_hash=credentials.hash_password(password),
            first_name=first_name or '',
            last_name=last_name or '',
            role=role or DEFAULT_ROLE,
        )
        logger.info("User registered", extra={"userId": user.id, "email": email})
        return user

    def find_all(self) -> list[User]:
        return self.repo.list_all()

    def find_by_id(self, user_id: str) -> User:
        user = self.repo.get_by_id(user_id)
        if not user:
            raise NotFoundError()
        return user

    def find_by_email(self, email: str) -> User:
        user = self.repo.get_by_email(email)
        if not user:
            raise NotFoundError()
        return user

    def authenticate(self, email: str, password: str) -> dict:
        """Check credentials and issue a bearer token.

        Returns:
            {"user": <user without password_hash>, "token": <JWT>}

        Raises:
            NotFoundError: no user with this email
            InvalidCredentialsError: password does not match
        """
        user = self.find_by_email(email)
        if not credentials.verify_password(password, user.password_hash):
            logger.info("Authentication failed", extra={"userId": user.id})
            raise InvalidCredentialsError()

        token = credentials.issue_token(user.id, user.role)
        logger.info("User logged in", extra={"userId": user.id, "email": email})
        return {"user": public_view(user), "token": token}

    def update_profile(self, user_id: str, fields: dict) -> User:
        """Apply the supplied profile fields and bump updated_at.

        Keys outside UPDATABLE_FIELDS (password_hash, id, timestamps) and
        None values are ignored. An empty role is ignored too, so a user
        never ends up without one.

        Raises:
            NotFoundError: no user with this id
            DuplicateError: the new email belongs to another user
        """
        patch = {
            key: value for key, value in fields.items()
            if key in UPDATABLE_FIELDS and value is not None
        }
        if not patch.get('role', DEFAULT_ROLE):
            patch.pop('role')

        user = self.repo.update(user_id, patch)
        if not user:
            raise NotFoundError()
        return user

    def change_password(self, user_id: str, new_password: str) -> bool:
        """Replace the stored hash. Return False if the user does not exist."""
        if not self.repo.get_by_id(user_id):
            return False
        return self.repo.update_password(user_id, credentials.hash_password(new_password))

    def delete_account(self, user_id: str) -> bool:
        """Remove the user permanently. Return False if it did not exist."""
        return self.repo.delete(user_id)
