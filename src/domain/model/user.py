from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone

DEFAULT_ROLE = 'user'

# Fields a profile update may touch. password_hash has its own path.
UPDATABLE_FIELDS = ('email', 'first_name', 'last_name', 'role')

# MongoDB stores datetimes at millisecond resolution.
TIMESTAMP_TICK = timedelta(milliseconds=1)


@dataclass
class User:
    """Domain model representing a user account."""
    id: str
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    first_name: str = ''
    last_name: str = ''
    role: str = DEFAULT_ROLE


def utcnow() -> datetime:
    """Current UTC time truncated to millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond - now.microsecond % 1000)


def next_updated_at(previous: datetime) -> datetime:
    """Timestamp for a mutation that is strictly later than `previous`."""
    return max(utcnow(), previous + TIMESTAMP_TICK)


def public_view(user: User) -> dict:
    """Return the user as a dict without the password hash."""
    return {k: v for k, v in asdict(user).items() if k != 'password_hash'}
