"""
Cart Routes
============
Session cart API (JSON). The cart is identified by a cookie and kept in
memory on the server for the life of the process. Only adding a product
opens a session; the other endpoints answer with an empty cart when the
cookie is missing or stale.

Endpoints:
  GET    /api/panier                         - Cart summary
  POST   /api/panier/articles                - Add a product (JSON body)
  POST   /api/panier/articles/{item_id}/plus  - One more unit
  POST   /api/panier/articles/{item_id}/moins - One unit less (drops at 0)
  DELETE /api/panier                         - Empty the cart
"""

import math
from typing import Any, Dict, Optional

from fastapi import APIRouter, Request, Body
from fastapi.responses import JSONResponse

from common.helpers import normalize_price
from config.settings import CART_COOKIE
from modules.cart.service import CartSessions, match_line_id
from modules.cart.store import CartStore, resolve_id

router = APIRouter(prefix="/api/panier", tags=["cart"])

# Subtotals and totals must stay finite floats
MAX_UNIT_PRICE = 1_000_000_000
MAX_QUANTITY = 10_000


def _sessions(request: Request) -> CartSessions:
    return request.app.state.carts


def _cart_response(session_id: Optional[str], cart: CartStore, status_code: int = 200) -> JSONResponse:
    response = JSONResponse(cart.summary(), status_code=status_code)
    if session_id:
        response.set_cookie(CART_COOKIE, session_id, httponly=True, samesite="lax")
    return response


def _has_non_finite(value: Any) -> bool:
    if isinstance(value, float):
        return not math.isfinite(value)
    if isinstance(value, dict):
        return any(_has_non_finite(v) for v in value.values())
    if isinstance(value, list):
        return any(_has_non_finite(v) for v in value)
    return False


def _invalid_product(product: Dict[str, Any]) -> Optional[str]:
    """Reason a product cannot go in the cart, or None."""
    if resolve_id(product) is None:
        return "Produit invalide : identifiant ou nom requis."
    if _has_non_finite(product):
        return "Produit invalide : valeur numérique non finie."
    if normalize_price(product.get("prix")) > MAX_UNIT_PRICE:
        return "Produit invalide : prix hors limites."
    quantite = product.get("quantite")
    if isinstance(quantite, int) and quantite > MAX_QUANTITY:
        return "Produit invalide : quantité hors limites."
    return None


# ==========================================
# 🛒 View Cart
# ==========================================

@router.get("")
async def view_cart(request: Request):
    session_id = request.cookies.get(CART_COOKIE)
    cart = _sessions(request).get(session_id)
    if cart is None:
        return _cart_response(None, CartStore())
    return _cart_response(session_id, cart)


# ==========================================
# ➕ Add Product
# ==========================================

@router.post("/articles")
async def add_to_cart(request: Request, product: Dict[str, Any] = Body(...)):
    problem = _invalid_product(product)
    if problem:
        return JSONResponse({"message": problem}, status_code=400)
    session_id, cart = _sessions(request).get_or_create(request.cookies.get(CART_COOKIE))
    cart.add(product)
    return _cart_response(session_id, cart)


# ==========================================
# ➕➖ Quantity
# ==========================================

def _change_quantity(request: Request, item_id: str, action: str) -> JSONResponse:
    session_id = request.cookies.get(CART_COOKIE)
    cart = _sessions(request).get(session_id)
    if cart is None:
        return _cart_response(None, CartStore())
    line_id: Optional[Any] = match_line_id(cart, item_id)
    if line_id is not None:
        if action == "plus":
            cart.increment(line_id)
        else:
            cart.decrement(line_id)
    return _cart_response(session_id, cart)


@router.post("/articles/{item_id}/plus")
async def increment_item(request: Request, item_id: str):
    return _change_quantity(request, item_id, "plus")


@router.post("/articles/{item_id}/moins")
async def decrement_item(request: Request, item_id: str):
    return _change_quantity(request, item_id, "moins")


# ==========================================
# 🗑️ Clear
# ==========================================

@router.delete("")
async def clear_cart(request: Request):
    session_id = request.cookies.get(CART_COOKIE)
    cart = _sessions(request).get(session_id)
    if cart is None:
        return _cart_response(None, CartStore())
    cart.clear()
    return _cart_response(session_id, cart)
