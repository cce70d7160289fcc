from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import (
    CategoryViewSet,
    ColorViewSet,
    SizeViewSet,
    ProductViewSet,
    ProductSizeViewSet,
    VariantViewSet,
    PriceHistoryViewSet,
    CatalogViewSet,
    CatalogCategoryViewSet,
    DashboardStatsView,
)

router = DefaultRouter()
router.register(r'categories', CategoryViewSet, basename='category')
router.register(r'colors', ColorViewSet, basename='color')
router.register(r'sizes', SizeViewSet, basename='size')
router.register(r'products', ProductViewSet, basename='product')
router.register(r'product-sizes', ProductSizeViewSet, basename='product-size')
router.register(r'variants', VariantViewSet, basename='variant')
router.register(r'price-history', PriceHistoryViewSet, basename='price-history')
router.register(r'catalog', CatalogViewSet, basename='catalog')
router.register(r'catalog-categories', CatalogCategoryViewSet, basename='catalog-category')

urlpatterns = [
    path('dashboard/stats/', DashboardStatsView.as_view(), name='dashboard-stats'),
    path('', include(router.urls)),
]
