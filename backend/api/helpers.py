"""Shared helpers for API routes (durations, error bodies, route directory)."""

from fastapi.responses import JSONResponse

AVAILABLE_ROUTES = [
    "GET /api/data/:id - Get a build by id",
    "GET /api/data - List all builds",
    "POST /api/data - Store a new build (removed automatically after {lifetime})",
    "GET /api/stats - Store statistics",
    "GET /health - Data file status and record count",
]


def humanize_ms(ms: int) -> str:
    """2 hours, 30 minutes, 45 seconds. Falls back to whole seconds."""
    for unit_ms, unit in ((3_600_000, "hour"), (60_000, "minute"), (1000, "second")):
        if ms >= unit_ms and ms % unit_ms == 0:
            n = ms // unit_ms
            return f"{n} {unit}{'s' if n != 1 else ''}"
    seconds = ms // 1000
    return f"{seconds} second{'s' if seconds != 1 else ''}"


def available_routes(lifetime_ms: int) -> list[str]:
    lifetime = humanize_ms(lifetime_ms)
    return [r.format(lifetime=lifetime) for r in AVAILABLE_ROUTES]


def error_response(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse({"success": False, "error": error, **extra}, status_code=status_code)
