"""Health check Pydantic models."""

import sys
from datetime import datetime
from typing import Optional

import pymongo
from pydantic import BaseModel, Field


class HealthStatus(BaseModel):
    status: str = Field(default="ok")
    time: datetime
    store: str = Field(default="unknown")
    store_backend: str = Field(default="unknown")
    mongo_host: Optional[str] = None
    mongo_db: Optional[str] = None
    store_error: Optional[str] = None
    questionnaire: str
    python: str = Field(default_factory=lambda: sys.version.split()[0])
    pymongo: str = Field(
        default_factory=lambda: getattr(pymongo, "__version__", "unknown")
    )
