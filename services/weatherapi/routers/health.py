"""Health check and liveness banner."""

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict:
    return {
        "success": True,
        "data": {
            "status": "healthy",
            "version": request.app.state.settings.app_version,
        },
        "requestId": request.state.request_id,
    }


@router.get("/weather", response_class=PlainTextResponse)
async def banner() -> str:
    return "Weather Service API is running! Access weather data at /api/v1"
