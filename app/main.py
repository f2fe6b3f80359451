import os

import uvicorn
from fastapi import Depends, FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from submission.handler import handle_submission, parse_body
from submission.utils import log

app = FastAPI()

SUBMIT_PATH = "/api/submit"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def response_headers(settings: Settings) -> dict:
    return dict(CORS_HEADERS) if settings.cors_enabled else {}


def method_not_allowed(settings: Settings) -> JSONResponse:
    return JSONResponse(
        status_code=405,
        content={"error": "Method not allowed"},
        headers=response_headers(settings),
    )


@app.exception_handler(StarletteHTTPException)
async def submit_method_handler(request: Request, exc: StarletteHTTPException):
    # Verbs outside ALL_METHODS (TRACE, CONNECT, PROPFIND...) are rejected
    # by the router before `submit` runs.
    if exc.status_code == 405 and request.url.path == SUBMIT_PATH:
        settings_factory = request.app.dependency_overrides.get(get_settings, get_settings)
        return method_not_allowed(settings_factory())
    return await http_exception_handler(request, exc)


@app.get("/")
async def health():
    return {"message": "Everything's fine"}


@app.api_route(SUBMIT_PATH, methods=ALL_METHODS)
async def submit(request: Request, settings: Settings = Depends(get_settings)):
    headers = response_headers(settings)

    if request.method == "OPTIONS" and settings.cors_enabled:
        return Response(status_code=200, headers=headers)

    if request.method != "POST":
        return method_not_allowed(settings)

    try:
        body = parse_body(await request.body())
        status_code, content = await handle_submission(body, settings)
    except Exception as e:
        log(f"ERROR: Handler error: {type(e).__name__} - {e}")
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": "Server error"},
            headers=headers,
        )

    return JSONResponse(status_code=status_code, content=content, headers=headers)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))
