from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(
        self,
        email: str,
        password_hash: str,
        first_name: str = '',
        last_name: str = '',
        role: str = 'user',
    ) -> User:
        """Insert a new user and return it with its assigned ID.

        Raises DuplicateError if the backend rejects the email as taken.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def list_all(self) -> list[User]:
        """Return every user, in backend order."""
        ...

    def update(self, user_id: str, fields: dict) -> User | None:
        """Set the given fields and bump updated_at. Return the updated User or None if not found."""
        ...

    def update_password(self, user_id: str, password_hash: str) -> bool:
        """Replace the password hash and bump updated_at. Return True if the user existed."""
        ...

    def delete(self, user_id: str) -> bool:
        """Remove the user. Return True if exactly one record was removed."""
        ...
