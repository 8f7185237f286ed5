"""
Blog list backend

Assembles the blog and user routers into one FastAPI application:

    uvicorn app.main:app --reload
"""
import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from apps.shared.cors import setup_cors
from apps.shared.database import init_db
from apps.shared.errors import setup_error_handlers
from apps.blog.main import router as blog_router
from apps.users.main import router as users_router, login_router

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("blog-service")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Blog service started")
    yield


app = FastAPI(
    title="Blog Service",
    version="1.0.0",
    description="Blog posts owned by users, with token-based authentication on writes",
    lifespan=lifespan,
)

setup_cors(app)
setup_error_handlers(app)

app.include_router(blog_router)
app.include_router(users_router)
app.include_router(login_router)
