"""
Health and banner endpoints.
"""
from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Plain-text banner so hitting the base URL is not a 404."""
    return "Money gateway is running. Try /health or see /docs for the endpoints."


@router.get("/health")
async def health() -> dict:
    return {"ok": True}
