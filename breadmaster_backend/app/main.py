# main.py - backend entrypoint
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.routing import APIRoute

from breadmaster_backend.app.routers import (
    analysis, bakes, preferments, recipes, settings, storage_items,
)
from breadmaster_backend.app.utils.logs import get_logger

log = get_logger("app")

app = FastAPI(title="Breadmaster API")

# --- CORS for Vite dev -------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Include routers under /api ----------------------------------------------
for _module in (recipes, preferments, bakes, analysis, settings, storage_items):
    app.include_router(_module.router, prefix="/api")
    log.debug("Mounted %s at /api%s", _module.__name__.rsplit(".", 1)[-1], _module.router.prefix)

# --- Health ------------------------------------------------------------------
@app.get("/health")
async def health():
    return {"ok": True}

@app.get("/api/health")
async def api_health():
    # mirror the non-prefixed /health so the FE's /api/health succeeds
    return {"ok": True}

# Log final routes for sanity check
@app.on_event("startup")
async def _log_routes():
    for r in app.router.routes:
        if isinstance(r, APIRoute):
            log.debug("%-10s %s", ",".join(sorted(r.methods)), r.path)
