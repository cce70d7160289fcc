from django_filters import rest_framework as filters
from apps.catalog.models import Product, ProductVariant, PriceHistory


class ProductFilter(filters.FilterSet):
    """Filter for the admin product table."""

    category_name = filters.CharFilter(field_name='category__name')
    code = filters.CharFilter(field_name='product_code', lookup_expr='istartswith')

    class Meta:
        model = Product
        fields = ['category', 'category_name', 'status', 'is_custom_order', 'code']


class VariantFilter(filters.FilterSet):
    """Filter for variants."""

    product_code = filters.CharFilter(field_name='product__product_code')
    size = filters.CharFilter(field_name='product_size__name')

    # Stock filters
    in_stock = filters.BooleanFilter(method='filter_in_stock')

    class Meta:
        model = ProductVariant
        fields = ['product', 'product_code', 'product_size', 'size', 'color', 'is_available']

    def filter_in_stock(self, queryset, name, value):
        if value is True:
            return queryset.filter(stock_quantity__gt=0, is_available=True)
        elif value is False:
            return queryset.filter(stock_quantity=0) | queryset.filter(is_available=False)
        return queryset


class PriceHistoryFilter(filters.FilterSet):

    product = filters.NumberFilter(field_name='product_price__product')

    class Meta:
        model = PriceHistory
        fields = ['product_price', 'product']
