"""Marketgate FastAPI application.

Web server for the quality domain: seller onboarding, product submission and
the product assessment pipeline. Commands are processed synchronously per
request inside the domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied:
#   - "test"       → event_processing = "sync"  (projectors fire in UoW)
#   - "production" → event_processing = "async" (projectors fire via Engine)
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from quality.api.handlers import register_error_handlers
from quality.domain import quality
from quality.utils.logging import add_context, clear_context

quality.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Marketgate API",
    description="Marketplace quality gate: product assessment pipeline",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_DOMAIN_PREFIXES = ("/sellers", "/products", "/assessments")


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the Protean domain context for domain routes."""
    if request.url.path.startswith(_DOMAIN_PREFIXES):
        add_context(method=request.method, path=request.url.path)
        try:
            with quality.domain_context():
                response = await call_next(request)
        finally:
            clear_context()
        return response
    # Health check, docs, etc.
    return await call_next(request)


register_error_handlers(app)


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from quality.api import assessment_router, product_router, seller_router  # noqa: E402

app.include_router(seller_router)
app.include_router(product_router)
app.include_router(assessment_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": quality.name}})
