# blog/main.py
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Your configuration and DB
from blog.config import settings
from blog.core.db import init_db, close_db, schema_ready
from blog.core.errors import register_exception_handlers
from blog.core.limiter import limiter

from blog.api.v1.routers import auth, users, posts, comments, likes

logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)
app.state.limiter = limiter  # slowapi looks the limiter up here

# Every failure leaves through the error translator
register_exception_handlers(app)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup():
    await init_db(generate_schemas=settings.generate_schemas)
    if not await schema_ready():
        logger.error("[startup] database has no tables; run `aerich init-db` (or set GENERATE_SCHEMAS=true)")
    logger.info("[startup] %s ready (env=%s, debug=%s)", settings.APP_NAME, settings.env, settings.debug)


@app.on_event("shutdown")
async def on_shutdown():
    await close_db()


# REST
app.include_router(auth.router, prefix="/api/v1")
app.include_router(users.router, prefix="/api/v1")
app.include_router(posts.router, prefix="/api/v1")
app.include_router(comments.router, prefix="/api/v1")
app.include_router(likes.router, prefix="/api/v1")


@app.get("/healthz")
def healthz():
    return {"ok": True}


def run():
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run("blog.main:app", host=settings.host, port=settings.port)
