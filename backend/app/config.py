import os


def _canon_prefix(val: str | None) -> str:
    """Normalise an API mount point to ``/name`` with no trailing slash."""

    val = (val or "").strip().strip("/")
    return f"/{val}" if val else "/api"


API_PREFIX = _canon_prefix(os.getenv("API_PREFIX"))

# A tournament may be split into at most this many groups.
MAX_GROUPS_PER_TOURNAMENT = 5


def admin_username() -> str:
    return (os.getenv("ADMIN_USERNAME") or "admin").strip().lower()


def admin_password_hash() -> str | None:
    """Return the bcrypt hash admins log in against, read at call time."""

    value = (os.getenv("ADMIN_PASSWORD_HASH") or "").strip()
    return value or None
