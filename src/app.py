"""Workroom FastAPI application.

Back-office web server for the sales and production consoles. Commands are
processed synchronously inside the request; every request runs in the
workroom domain context.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from workroom.domain import workroom  # noqa: E402
from workroom.utils.logging import add_context, clear_context

workroom.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Workroom API",
    description="Made-to-order blind orders — sales intake and production workflow",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the workroom domain context and bind the actor for logging."""
    add_context(actor=request.headers.get("x-actor", ""), path=request.url.path)
    try:
        with workroom.domain_context():
            return await call_next(request)
    finally:
        clear_context()


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from workroom.api import orders_router, production_router, register_store_error_handler  # noqa: E402

app.include_router(orders_router)
app.include_router(production_router)
register_exception_handlers(app)
register_store_error_handler(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": workroom.name})
