import json
from pathlib import Path
from typing import Any, Dict
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request, Response

from metaview.config import settings
from metaview.logger import bind_request_id, clear_request_id, get_logger

logger = get_logger(__name__)

app = FastAPI(title=f"{settings.app_name} Data Source", version="0.1.0", debug=settings.debug)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id") or uuid4().hex
    bind_request_id(rid)
    try:
        response: Response = await call_next(request)
    finally:
        clear_request_id()
    response.headers["X-Request-ID"] = rid
    return response


def load_source(path: str) -> Any:
    """Read the configured JSON source file; any JSON shape is returned as-is."""
    source = Path(path)
    try:
        text = source.read_text(encoding="utf-8")
    except OSError as e:
        logger.error(f"[api] meta source unreadable: {source} ({e})")
        raise HTTPException(status_code=502, detail=f"Meta source unreadable: {source.name}")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"[api] meta source is not valid JSON: {source} ({e})")
        raise HTTPException(status_code=502, detail=f"Meta source is not valid JSON: {source.name}")


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/info")
def info() -> Dict[str, Any]:
    return {
        "app": app.title,
        "version": app.version,
        "source_file": settings.meta_source_file,
    }


@app.get("/api/components/meta")
def components_meta() -> Any:
    if not settings.meta_source_file:
        logger.info("[api] no META_SOURCE_FILE configured; serving empty payload")
        return {}
    payload = load_source(settings.meta_source_file)
    logger.info(f"[api] serving meta payload ({type(payload).__name__})")
    return payload
