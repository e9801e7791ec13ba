import uuid

from supabase import create_client, Client
from studyhard.core.config import settings

ASSIGNMENTS_TABLE = "assignments"
SUBMISSIONS_TABLE = "submissions"

_supabase_client: Client | None = None


def get_supabase() -> Client:
    """Shared client, created on first use and reused for every request."""
    global _supabase_client
    if _supabase_client is None:
        _supabase_client = create_client(
            settings.SUPABASE_URL,
            settings.SUPABASE_SERVICE_KEY or settings.SUPABASE_KEY,
        )
    return _supabase_client


def parse_id(value) -> str | None:
    """
    Canonical lowercase form of a record id, or None if it is not one.

    Only the hyphenated 8-4-4-4-12 spelling is accepted; urn, brace and
    bare-hex forms are rejected before they reach a query.
    """
    if not isinstance(value, str):
        return None
    try:
        canonical = str(uuid.UUID(value))
    except ValueError:
        return None
    if canonical != value.lower():
        return None
    return canonical
