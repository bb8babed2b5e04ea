"""
V1 API router aggregator — wires all endpoint modules together.
"""

from fastapi import APIRouter

from gamification.api.v1.endpoints import gamification, health

api_router = APIRouter()

# Recompute, settings, summaries
api_router.include_router(gamification.router)

# Liveness
api_router.include_router(health.router)
