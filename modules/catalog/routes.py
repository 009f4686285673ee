"""
Catalog Module - Routes
========================
Public product listing (JSON).

Endpoints:
  GET /api/produits          - Products from the database
  GET /api/produits/locaux   - Static local catalog
Both accept ?q= to filter on the product name.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from config.database import get_db
from common.exceptions import CatalogUnavailableError
from modules.catalog.service import catalog_service, filter_products

router = APIRouter(prefix="/api/produits", tags=["catalog"])


@router.get("")
async def list_products(q: Optional[str] = None, db: Session = Depends(get_db)):
    try:
        products = catalog_service.list_products(db)
    except CatalogUnavailableError as e:
        return JSONResponse({"message": e.message}, status_code=503)
    return filter_products(products, q)


@router.get("/locaux")
async def list_local_products(q: Optional[str] = None):
    return filter_products(catalog_service.list_local_products(), q)
