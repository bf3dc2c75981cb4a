"""
utils/constants.py

Purpose: Centralized static content

- API response messages
- Client-facing status messages
- Form field names

(Prevents hardcoding across the codebase)
"""

# ============================================================
# API RESPONSE MESSAGES
# ============================================================

USER_CREATED_MESSAGE = "User created"
USER_UPDATED_MESSAGE = "User updated"
USER_DELETED_MESSAGE = "User deleted"
USER_NOT_FOUND_MESSAGE = "User not found"

ROOT_GREETING = "Hello from FastAPI + MongoDB!"

# ============================================================
# CLIENT STATUS MESSAGES
# ============================================================

CLIENT_CREATE_SUCCESS = "User created successfully!"
CLIENT_UPDATE_SUCCESS = "User updated successfully!"
CLIENT_DELETE_SUCCESS = "User deleted successfully!"

CLIENT_FETCH_ERROR = "Failed to fetch users. Make sure the backend server is running on port 5000."
CLIENT_CREATE_ERROR = "Failed to create user."
CLIENT_UPDATE_ERROR = "Failed to update user."
CLIENT_DELETE_ERROR = "Failed to delete user."

DELETE_CONFIRM_PROMPT = 'Are you sure you want to delete "{name}"?'

# ============================================================
# USER RECORD
# ============================================================

USER_FIELDS = ("name", "age", "city", "email", "hobbies")
