"""HTTP routers, mounted under /api by luxquote.main."""

from fastapi import HTTPException


def api_error(status_code: int, error: str, message: str) -> HTTPException:
    """HTTPException whose detail is {"error": <code>, "message": <text>}."""
    return HTTPException(status_code=status_code, detail={"error": error, "message": message})
