from fastapi import FastAPI, Request
from api.validation import router as validation_router
from api.rules import router as rules_router
from api.mapping import router as mapping_router
from api.export import router as export_router
from api.healthcheck import router as healthcheck_router
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi
from dotenv import load_dotenv
from utils.logger import logger
import os
import secrets

load_dotenv()


def _env_list(name: str) -> list:
    return [item.strip() for item in os.getenv(name, "").split(",") if item.strip()]


CORS_ALLOW_ORIGINS = _env_list("CORS_ALLOW_ORIGINS")
ALLOWED_HOSTS = _env_list("ALLOWED_HOSTS") or ["*"]
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", "0"))  # 0 = no limit

API_KEY_HEADER = "x-api-key"
SECURITY_SCHEME = "ApiKeyAuth"
HEALTH_PATH = "/api/health/check"
DOC_PATHS = ("/openapi.json", "/redoc", "/docs")

app = FastAPI(
    title="Scheduling Data Validator",
    version="1.0.0",
    description="Validation, header mapping and rule authoring for client/worker/task spreadsheets",
)


def is_public_path(path: str) -> bool:
    """Docs and the health check are reachable without an API key."""
    if path == HEALTH_PATH or path in DOC_PATHS:
        return True
    return path.startswith("/docs/")


if os.getenv("ENABLE_CORS") == "true":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(TrustedHostMiddleware, allowed_hosts=ALLOWED_HOSTS)


@app.middleware("http")
async def reject_large_uploads(request: Request, call_next):
    declared = request.headers.get("content-length", "")
    if MAX_BODY_BYTES > 0 and declared.isdigit() and int(declared) > MAX_BODY_BYTES:
        logger.warning(
            "Rejected %s %s: body of %s bytes exceeds %d",
            request.method, request.url.path, declared, MAX_BODY_BYTES,
        )
        return JSONResponse(status_code=413, content={"detail": "Payload too large"})
    return await call_next(request)


@app.middleware("http")
async def require_api_key(request: Request, call_next):
    if request.method == "OPTIONS" or is_public_path(request.url.path):
        return await call_next(request)

    # read per request so the key can be rotated without a restart
    expected = os.getenv("API_KEY")
    if not expected:
        logger.warning("API_KEY not set; API key auth is DISABLED (dev mode).")
        return await call_next(request)

    supplied = request.headers.get(API_KEY_HEADER) or ""
    if not secrets.compare_digest(supplied.encode(), expected.encode()):
        return JSONResponse(status_code=401, content={"detail": "Unauthorized"})
    return await call_next(request)


def custom_openapi():
    """OpenAPI schema with the API key header declared on every non-public route."""
    if app.openapi_schema:
        return app.openapi_schema

    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    schema.setdefault("components", {}).setdefault("securitySchemes", {})[SECURITY_SCHEME] = {
        "type": "apiKey",
        "in": "header",
        "name": API_KEY_HEADER,
        "description": "Enter your API key",
    }
    for path, operations in schema.get("paths", {}).items():
        required = [] if is_public_path(path) else [{SECURITY_SCHEME: []}]
        for operation in operations.values():
            operation.setdefault("security", required)

    app.openapi_schema = schema
    return app.openapi_schema


app.openapi = custom_openapi

app.include_router(validation_router, prefix="/api")
app.include_router(rules_router, prefix="/api")
app.include_router(mapping_router, prefix="/api")
app.include_router(export_router, prefix="/api")
app.include_router(healthcheck_router, prefix="/api")
