"""
Catalog Module - Local Catalog
===============================
Static product list served without a database round trip. Prices are kept in
their display form ("59,99 €"); cart totals go through normalize_price.
"""

LOCAL_PRODUCTS = [
    {"id": 1, "name": "Chaussures de running", "prix": "59,99 €", "image": "/images/running.jpg"},
    {"id": 2, "name": "Sac à dos urbain", "prix": "34,50 €", "image": "/images/sac.jpg"},
    {"id": 3, "name": "Montre connectée", "prix": "129,00 €", "image": "/images/montre.jpg"},
    {"id": 4, "name": "Casque audio sans fil", "prix": "89,90 €", "image": "/images/casque.jpg"},
    {"id": 5, "name": "Gourde isotherme", "prix": "19,99 €", "image": "/images/gourde.jpg"},
    {"id": 6, "name": "Lunettes de soleil", "prix": "45 €", "image": "/images/lunettes.jpg"},
]
