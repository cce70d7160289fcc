"""
Catalog models for the pet-products storefront.

Model Hierarchy:
- Category, Color, Size: reference data
- Product: base product (e.g., "Cama Luxo")
- ProductSize: sizes owned by one product (P, M, G, GG)
- ProductPrice: one price per product size
- ProductImage: images grouped by color
- ProductVariant: size + color combination with a unique code and stock
- PriceHistory: audit trail of price changes
"""

from .category import Category
from .color import Color
from .size import Size, ProductSize
from .product import Product, ProductPrice
from .image import ProductImage
from .variant import ProductVariant
from .price_history import PriceHistory

__all__ = [
    'Category',
    'Color',
    'Size',
    'ProductSize',
    'Product',
    'ProductPrice',
    'ProductImage',
    'ProductVariant',
    'PriceHistory',
]
