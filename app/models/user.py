"""
app/models/user.py

Purpose: User document model

- Converts MongoDB documents into JSON-safe records
- Exposes the ObjectId as both "_id" and "id"
"""

from typing import Any, Dict, Optional

from bson import ObjectId

from utils.constants import USER_FIELDS


def serialize_user(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Turns a stored user document into an API record.

    Args:
        document: Raw document from the users collection

    Returns:
        Dict with "_id", "id" and the user fields, or None for None
    """
    if document is None:
        return None

    raw_id = document.get("_id")
    user_id = str(raw_id) if isinstance(raw_id, ObjectId) else raw_id

    record: Dict[str, Any] = {"_id": user_id, "id": user_id}
    for field in USER_FIELDS:
        if field in document:
            record[field] = document[field]

    record.setdefault("hobbies", [])
    return record
