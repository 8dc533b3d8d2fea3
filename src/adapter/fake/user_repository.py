"""In-memory implementation of UserRepository for testing."""

import uuid
from dataclasses import replace

from domain.model.errors import DuplicateError
from domain.model.user import DEFAULT_ROLE, User, next_updated_at, utcnow


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}

    # ── write operations ─────────────────────────────────────

    def create(
        self,
        email: str,
        password_hash: str,
        first_name: str = '',
        last_name: str = '',
        role: str = DEFAULT_ROLE,
    ) -> User:
        # Mirrors the unique email index of the Mongo adapter
        if any(u.email == email for u in self.store.values()):
            raise DuplicateError()

        user_id = uuid.uuid4().hex
        now = utcnow()

        user = User(
            id=user_id,
            email=email,
            password_hash=password_hash,
            created_at=now,
            updated_at=now,
            first_name=first_name,
            last_name=last_name,
            role=role,
        )
        self.store[user_id] = user
        return replace(user)

    def update(self, user_id: str, fields: dict) -> User | None:
        user = self.store.get(user_id)
        if not user:
            return None

        new_email = fields.get('email')
        if new_email is not None and any(
            u.email == new_email and u.id != user_id for u in self.store.values()
        ):
            raise DuplicateError()

        updated = replace(user, **fields, updated_at=next_updated_at(user.updated_at))
        self.store[user_id] = updated
        return replace(updated)

    def update_password(self, user_id: str, password_hash: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        user.password_hash = password_hash
        user.updated_at = next_updated_at(user.updated_at)
        return True

    def delete(self, user_id: str) -> bool:
        return self.store.pop(user_id, None) is not None

    # ── read operations ──────────────────────────────────────
    # Copies are returned so callers cannot mutate stored records.

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return replace(user)
        return None

    def get_by_id(self, user_id: str) -> User | None:
        user = self.store.get(user_id)
        return replace(user) if user else None

    def list_all(self) -> list[User]:
        return [replace(u) for u in self.store.values()]
