"""
Flag management API routes (LaunchDarkly-compatible subset)
"""

import json
import math

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from mockflags.feature_flags.store import FlagStore, flag_key_of
from mockflags.utils.logger import get_logger

logger = get_logger(__name__)

# Routes are matched in registration order; keep the archive route last.
router = APIRouter()


def _get_store(request: Request) -> FlagStore:
    return request.app.state.flag_store


def _reject_constant(name: str):
    raise ValueError(f"Unsupported JSON constant: {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


@router.post("/api/v2/flags/{project_key}", status_code=201)
async def create_flag(project_key: str, request: Request):
    """Create or replace a flag from the raw JSON body.

    Answers 400 Invalid JSON when the body does not parse, holds numbers no
    JSON response could carry (NaN, Infinity, overflowing floats), nests
    too deeply to parse, or is valid JSON but not an object. A flag record
    is always an object, so arrays and bare scalars are treated as
    malformed rather than stored.
    """
    body = await request.body()
    try:
        payload = json.loads(body, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except (ValueError, RecursionError):
        return JSONResponse(status_code=400, content={"error": "Invalid JSON"})

    if not isinstance(payload, dict):
        return JSONResponse(status_code=400, content={"error": "Invalid JSON"})

    record = _get_store(request).put(project_key, payload)
    flag_key = flag_key_of(payload)
    logger.with_context(project_key=project_key, flag_key=flag_key).info(
        f"Created flag: {flag_key} in project: {project_key}"
    )
    return JSONResponse(status_code=201, content=record)


@router.get("/api/v2/flags/{project_key}/{flag_key}")
async def get_flag(project_key: str, flag_key: str, request: Request):
    return JSONResponse(content=_get_store(request).get(project_key, flag_key))


@router.delete("/api/v2/flags/{project_key}/{flag_key}", status_code=204)
async def delete_flag(project_key: str, flag_key: str, request: Request):
    _get_store(request).delete(project_key, flag_key)
    logger.with_context(project_key=project_key, flag_key=flag_key).info(
        f"Deleted flag: {flag_key} from project: {project_key}"
    )
    return Response(status_code=204)


@router.post("/api/v2/flags/{project_key}/{flag_key}/archive")
async def archive_flag(project_key: str, flag_key: str, request: Request):
    """Mark a flag archived; the request body is ignored"""
    record = _get_store(request).archive(project_key, flag_key)
    logger.with_context(project_key=project_key, flag_key=flag_key).info(
        f"Archived flag: {flag_key} in project: {project_key}"
    )
    return JSONResponse(content=record)
