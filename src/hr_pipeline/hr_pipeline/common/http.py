"""Route guards and JSON response helpers shared by the API controllers.

The session is populated by the external auth layer with user_id, role and
(for staff users) staff_member_id.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Optional

from flask import jsonify, session

from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def ok(data: Any = None, message: str = "OK", status: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), status


def fail(message: str, status: int = 400):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return fail("Authentication required", 401)
        if session.get("role") != Role.ADMIN.value:
            return fail("Forbidden", 403)
        return view(*args, **kwargs)

    return wrapper


def handle_errors(view):
    """Map domain errors to JSON error responses."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except NotFoundError as e:
            return fail(str(e), 404)
        except ValidationError as e:
            return fail(str(e), 400)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return fail("Internal server error", 500)

    return wrapper


def session_staff_member_id() -> Optional[int]:
    value = session.get("staff_member_id")
    if value in (None, ""):
        return None
    return int(value)
