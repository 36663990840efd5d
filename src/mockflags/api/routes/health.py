"""
Health Check API Routes
"""

from fastapi import APIRouter

router = APIRouter()


@router.get("/status")
async def status():
    """Basic liveness probe used by test harnesses before they start"""
    return {"status": "ok"}
