"""
Standard API response format and utility functions.
"""

from typing import Any


def success_response(data: Any = None, message: str = "Success") -> dict:
    return {"success": True, "data": data, "message": message}


def error_response(message: str = "Error", data: Any = None) -> dict:
    return {"success": False, "data": data, "message": message}


def inserted_response(rows: list[dict], message: str = "Created") -> dict:
    """Insert result: the new record id plus the stored row."""
    row = rows[0] if rows else None
    return success_response(
        data={"inserted_id": row["id"] if row else None, "record": row},
        message=message,
    )
