# Load .env file FIRST before any other imports that use os.getenv
from dotenv import load_dotenv
load_dotenv()

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from reflect.api.routes.analysis import router as analysis_router
from reflect.api.routes.insights import router as insights_router
from reflect.core.config import settings

app = FastAPI(title=settings.APP_NAME)

logging.basicConfig(level=logging.INFO)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analysis_router, prefix="/api/analysis", tags=["analysis"])
app.include_router(insights_router, prefix="/api/insights", tags=["insights"])


@app.get("/health")
def health():
    """Liveness probe; reports whether remote analysis is available."""
    return {"status": "ok", "ai_configured": settings.ai_configured}


# Run with:
# uvicorn main:app --reload --port 8001
