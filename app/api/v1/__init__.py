# app/api/v1/__init__.py
"""
Versioned API v1, aggregates all sub-routers under ``/api/v1``.

Usage in ``main.py``::

    from app.api.v1 import v1_router
    app.include_router(v1_router)
"""

from fastapi import APIRouter

from app.api.v1.routes.amounts import router as amounts_router
from app.api.v1.routes.gst import router as gst_router
from app.api.v1.routes.progress import router as progress_router
from app.api.v1.routes.labour import router as labour_router
from app.api.v1.routes.invoices import router as invoices_router

v1_router = APIRouter(prefix="/api/v1")

# Calculators
v1_router.include_router(amounts_router)
v1_router.include_router(gst_router)

# Site and labour rollups
v1_router.include_router(progress_router)
v1_router.include_router(labour_router)

# Billing
v1_router.include_router(invoices_router)

__all__ = ["v1_router"]
