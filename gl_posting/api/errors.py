"""
Translate posting engine errors into HTTP responses.
"""

from fastapi import HTTPException

from gl_posting.exceptions import GLError


def http_error(error: GLError) -> HTTPException:
    """Build the HTTPException for a GLError: its status and {code, message}."""
    return HTTPException(status_code=error.status_code, detail=error.to_dict())
