from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.db import Base, engine
from app.core.logging import setup_logging
from app.api.articles import router as articles_router
from app.api.collections import router as collections_router

setup_logging(settings.log_level)

app = FastAPI(title="Article CMS API", version="1.0.0")

# Read-only public content, keep CORS permissive for frontend integration.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(articles_router)
app.include_router(collections_router)

@app.on_event("startup")
async def on_startup():
    # Create tables (no migration tool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

@app.on_event("shutdown")
async def on_shutdown():
    await engine.dispose()

@app.get("/health")
async def health():
    return {"ok": True}

def run() -> None:
    uvicorn.run("app.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())

if __name__ == "__main__":
    run()
