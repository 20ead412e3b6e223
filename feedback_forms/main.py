import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from feedback_forms.core.database import close_db, engine, init_db
from feedback_forms.core.errors import register_exception_handlers
from feedback_forms.core.logging_config import configure_logging
from feedback_forms.core.settings import settings
from feedback_forms.routes import auth
from feedback_forms.routes import forms
from feedback_forms.routes import responses

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

db_connected = False


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Runs on startup and shutdown.
    Checks the database connection and creates missing tables.
    """
    global db_connected
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        await init_db()
        db_connected = True
        logger.info("✅ Database connected successfully.")
    except Exception as e:
        db_connected = False
        logger.error(f"❌ Database connection failed: {e}")

    yield

    await close_db()


app = FastAPI(
    title="Feedback Forms",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(auth.router, prefix=settings.API_PREFIX)
app.include_router(forms.router, prefix=settings.API_PREFIX)
app.include_router(responses.router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    return {
        "message": "API is running...",
        "database_connected": db_connected
    }
