# src/shop_backend/api/models.py

"""Pydantic models for the HTTP API."""

from __future__ import annotations

from pydantic import BaseModel


class PoolStatusResponse(BaseModel):
    """Worker pool snapshot."""

    name: str
    state: str
    size: int
    capacity: int
    queued: int
    active: int
    completed: int
    failed: int
    discarded: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    app_name: str
    version: str
    pool: PoolStatusResponse
