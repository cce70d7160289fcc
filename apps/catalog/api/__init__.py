from .serializers import (
    CategorySerializer,
    ColorSerializer,
    SizeSerializer,
    ProductSizeSerializer,
    ProductPriceSerializer,
    ProductImageSerializer,
    ProductListSerializer,
    ProductDetailSerializer,
    ProductWriteSerializer,
    VariantSerializer,
    VariantWriteSerializer,
    PriceHistorySerializer,
)

__all__ = [
    'CategorySerializer',
    'ColorSerializer',
    'SizeSerializer',
    'ProductSizeSerializer',
    'ProductPriceSerializer',
    'ProductImageSerializer',
    'ProductListSerializer',
    'ProductDetailSerializer',
    'ProductWriteSerializer',
    'VariantSerializer',
    'VariantWriteSerializer',
    'PriceHistorySerializer',
]
