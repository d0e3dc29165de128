from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitcheck.routes import register_routes

# Ensure backend/.env is loaded regardless of launch directory.
load_dotenv(Path(__file__).resolve().parents[1] / ".env")

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("fitcheck")

DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:5173"


def _cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


app = FastAPI(title="FitCheck Readiness API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)

register_routes(app)
logger.info("FitCheck API ready (store=%s)", os.environ.get("STORE_BACKEND", "mongo"))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "fitcheck.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
        reload=True,
    )
