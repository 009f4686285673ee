"""
Catalog Module - Models
========================
Products offered in the shop.
"""

from sqlalchemy import Column, Integer, String, Numeric
from config.database import Base


# ==========================================
# 📦 Product
# ==========================================

class Product(Base):
    __tablename__ = "produits"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    prix = Column(Numeric(10, 2), nullable=False, default=0)
    image = Column(String, nullable=True)  # URL or path

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "prix": float(self.prix) if self.prix is not None else 0.0,
            "image": self.image,
        }

    def __repr__(self):
        return f"<Product {self.name}>"
