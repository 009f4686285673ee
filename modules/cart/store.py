"""
Cart Module - Cart Store
=========================
In-memory shopping cart for one client session.

Line items are plain dicts: the product fields the caller passed in, plus a
normalized ``id`` and a ``quantite`` >= 1. Products from different sources
carry their key differently (``id``, ``_id``), so identity goes through
resolve_id.

Every mutation is written as a reducer over the current line items and
applied through update(), so a burst of calls always builds on the latest
state, never on a snapshot taken earlier.
"""

from typing import Any, Callable, Dict, List, Optional

from common.helpers import normalize_price

LineItems = List[Dict[str, Any]]

ID_FIELDS = ("id", "_id", "name")


def resolve_id(item: Dict[str, Any]) -> Any:
    """
    Cart identity of a product: first non-None of id, _id, then name.

    NOTE: falling back to the name means two distinct products sharing a name
    and lacking both keys collapse into one line item. Some catalog records
    have no stable key, so the fallback stays until the catalog guarantees one.
    """
    for field in ID_FIELDS:
        value = item.get(field)
        if value is not None:
            return value
    return None


def _quantity(item: Dict[str, Any]) -> int:
    """Quantity of a line item; absent (or 0) counts as 1."""
    return item.get("quantite") or 1


def _initial_quantity(product: Dict[str, Any]) -> int:
    """Quantity for a new line: the product's own if it is a positive int, else 1."""
    quantite = product.get("quantite")
    if isinstance(quantite, int) and not isinstance(quantite, bool) and quantite >= 1:
        return quantite
    return 1


class CartStore:
    """Ordered line items with add / increment / decrement / clear and totals."""

    def __init__(self, items: Optional[LineItems] = None):
        self._items: LineItems = [dict(it) for it in items or []]

    # ==========================================
    # State
    # ==========================================

    @property
    def items(self) -> LineItems:
        """Copy of the line items, in insertion order."""
        return [dict(it) for it in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def update(self, reducer: Callable[[LineItems], LineItems]) -> LineItems:
        """Replace the state with reducer(latest state). Returns the new state."""
        self._items = reducer(self._items)
        return self.items

    def find(self, product_id: Any) -> Optional[Dict[str, Any]]:
        for it in self._items:
            if resolve_id(it) == product_id:
                return dict(it)
        return None

    # ==========================================
    # Mutations
    # ==========================================

    def add(self, product: Dict[str, Any]) -> LineItems:
        """
        Add one unit of a product.

        An existing line keeps its own fields and gains one unit; the fields
        of the product passed in are not merged into it.
        """
        product_id = resolve_id(product)

        def reducer(prev: LineItems) -> LineItems:
            for index, existing in enumerate(prev):
                if resolve_id(existing) == product_id:
                    updated = list(prev)
                    updated[index] = {**existing, "quantite": _quantity(existing) + 1}
                    return updated
            return prev + [{**product, "id": product_id, "quantite": _initial_quantity(product)}]

        return self.update(reducer)

    def increment(self, product_id: Any) -> LineItems:
        return self.update(lambda prev: [
            {**it, "quantite": _quantity(it) + 1} if resolve_id(it) == product_id else it
            for it in prev
        ])

    def decrement(self, product_id: Any) -> LineItems:
        """Remove one unit; a line reaching 0 is dropped. Unknown ids are a no-op."""
        def reducer(prev: LineItems) -> LineItems:
            lowered = [
                {**it, "quantite": _quantity(it) - 1} if resolve_id(it) == product_id else it
                for it in prev
            ]
            return [it for it in lowered if it.get("quantite") is None or it["quantite"] > 0]

        return self.update(reducer)

    def replace(self, items: LineItems) -> LineItems:
        """Swap in a whole new list of line items."""
        fresh = [dict(it) for it in items]
        return self.update(lambda prev: fresh)

    def clear(self) -> LineItems:
        return self.update(lambda prev: [])

    # ==========================================
    # Derived values
    # ==========================================

    def total_articles(self) -> int:
        """Number of units in the cart (not the number of lines)."""
        return sum(_quantity(it) for it in self._items)

    def total(self) -> float:
        return sum(_quantity(it) * normalize_price(it.get("prix")) for it in self._items)

    def summary(self) -> Dict[str, Any]:
        """Line items with unit price and subtotal, plus cart totals."""
        lines = []
        for it in self._items:
            quantite = _quantity(it)
            unit_price = normalize_price(it.get("prix"))
            lines.append({
                **it,
                "quantite": quantite,
                "prix_unitaire": unit_price,
                "sous_total": round(unit_price * quantite, 2),
            })
        return {
            "articles": lines,
            "total_articles": self.total_articles(),
            "total": round(self.total(), 2),
        }
