"""
Catalog Module - Service Layer
================================
Product listing (database and local catalog) and name search.
"""

import logging
from typing import Iterable, List, Optional

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from common.exceptions import CatalogUnavailableError
from common.helpers import normalize_price
from modules.catalog.data import LOCAL_PRODUCTS
from modules.catalog.models import Product

logger = logging.getLogger("boutique.catalog")


def filter_products(products: Iterable[dict], text: Optional[str]) -> List[dict]:
    """Case-insensitive substring search on the product name."""
    needle = (text or "").lower()
    return [p for p in products if needle in (p.get("name") or "").lower()]


class CatalogService:

    def list_products(self, db: Session) -> List[dict]:
        """
        All products from the database, in id order.

        Raises:
            CatalogUnavailableError if the database cannot be read
        """
        try:
            products = db.query(Product).order_by(Product.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Product listing failed: {e}")
            raise CatalogUnavailableError()
        return [p.to_dict() for p in products]

    def list_local_products(self) -> List[dict]:
        """The static catalog (copies, callers may mutate them)."""
        return [dict(p) for p in LOCAL_PRODUCTS]

    def seed_products(self, db: Session, products: Iterable[dict]) -> int:
        """Insert products whose name is not in the table yet. Returns count added."""
        existing = {name for (name,) in db.query(Product.name).all()}
        count = 0
        for p in products:
            if p["name"] in existing:
                continue
            db.add(Product(name=p["name"], prix=normalize_price(p.get("prix")), image=p.get("image")))
            existing.add(p["name"])
            count += 1
        if count:
            db.flush()
        return count


# Singleton
catalog_service = CatalogService()
