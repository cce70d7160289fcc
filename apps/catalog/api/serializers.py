from rest_framework import serializers
from apps.catalog.models import (
    Category,
    Color,
    Size,
    ProductSize,
    Product,
    ProductPrice,
    ProductImage,
    ProductVariant,
    PriceHistory,
)
from apps.catalog.models.color import HEX_CODE_RE
from config.exceptions import InvalidHexCodeError


# =============================================================================
# Reference Data Serializers
# =============================================================================

class CategorySerializer(serializers.ModelSerializer):
    product_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Category
        fields = [
            'id', 'name', 'description', 'icon', 'product_count',
            'created_at', 'updated_at'
        ]


class ColorSerializer(serializers.ModelSerializer):
    # Declared explicitly so the pattern check raises InvalidHexCodeError
    hex_code = serializers.CharField()

    class Meta:
        model = Color
        fields = ['id', 'name', 'hex_code', 'created_at']

    def validate_hex_code(self, value):
        if not HEX_CODE_RE.match(value):
            raise InvalidHexCodeError()
        return value.upper()


class SizeSerializer(serializers.ModelSerializer):
    class Meta:
        model = Size
        fields = [
            'id', 'name', 'dimensions', 'width_cm', 'height_cm', 'depth_cm',
            'display_order', 'created_at', 'updated_at'
        ]


class ProductSizeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductSize
        fields = [
            'id', 'product', 'name', 'dimensions', 'width_cm', 'height_cm',
            'depth_cm', 'display_order', 'created_at', 'updated_at'
        ]
        read_only_fields = ['product']


# =============================================================================
# Product Serializers
# =============================================================================

class ProductPriceSerializer(serializers.ModelSerializer):
    size = serializers.CharField(source='product_size.name', read_only=True)
    dimensions = serializers.CharField(source='product_size.dimensions', read_only=True)

    class Meta:
        model = ProductPrice
        fields = ['id', 'product_size', 'size', 'dimensions', 'price', 'updated_at']


class ProductImageSerializer(serializers.ModelSerializer):
    color_name = serializers.CharField(source='color.name', read_only=True, default=None)
    thumbnail_url = serializers.SerializerMethodField()

    class Meta:
        model = ProductImage
        fields = [
            'id', 'product', 'color', 'color_name', 'image_url', 'thumbnail_url',
            'alt_text', 'display_order', 'is_available', 'stock_quantity'
        ]
        read_only_fields = ['product', 'image_url']

    def get_thumbnail_url(self, obj):
        if obj.image:
            request = self.context.get('request')
            if request:
                return request.build_absolute_uri(obj.thumbnail.url)
            return obj.thumbnail.url
        return None


class ProductListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for the admin product table."""
    category_name = serializers.CharField(source='category.name', read_only=True)
    price_range = serializers.CharField(read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'product_code', 'category', 'category_name',
            'status', 'is_custom_order', 'price_range', 'updated_at'
        ]


class ProductDetailSerializer(serializers.ModelSerializer):
    """Full product with sizes, prices and images."""
    category_name = serializers.CharField(source='category.name', read_only=True)
    sizes = ProductSizeSerializer(many=True, read_only=True)
    prices = ProductPriceSerializer(many=True, read_only=True)
    images = ProductImageSerializer(many=True, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description', 'product_code', 'category', 'category_name',
            'observations', 'is_custom_order', 'status',
            'sizes', 'prices', 'images',
            'created_at', 'updated_at'
        ]


class PriceInputSerializer(serializers.Serializer):
    """One price of the product form, keyed by size id or size name."""
    product_size = serializers.IntegerField(required=False)
    size = serializers.CharField(required=False)
    # Sign is checked by the editor before any query
    price = serializers.DecimalField(max_digits=10, decimal_places=2)


class ProductWriteSerializer(serializers.Serializer):
    """
    Input of the product editor.

    Only shape is checked here; business rules (name, category, prices > 0)
    are enforced by ProductEditorService.
    """
    name = serializers.CharField(required=False, allow_blank=True)
    description = serializers.CharField(required=False, allow_blank=True)
    category = serializers.IntegerField(required=False, allow_null=True)
    observations = serializers.CharField(required=False, allow_blank=True, max_length=255)
    is_custom_order = serializers.BooleanField(required=False)
    status = serializers.CharField(required=False)
    prices = PriceInputSerializer(many=True, required=False)
    expected_updated_at = serializers.DateTimeField(required=False)


# =============================================================================
# Variant Serializers
# =============================================================================

class VariantSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source='product.name', read_only=True)
    product_code = serializers.CharField(source='product.product_code', read_only=True)
    size = serializers.CharField(source='product_size.name', read_only=True)
    color_name = serializers.CharField(source='color.name', read_only=True, default=None)
    color_hex = serializers.CharField(source='color.hex_code', read_only=True, default=None)
    is_in_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = ProductVariant
        fields = [
            'id', 'product', 'product_name', 'product_code',
            'product_size', 'size', 'color', 'color_name', 'color_hex',
            'variant_code', 'stock_quantity', 'is_available', 'is_in_stock',
            'created_at', 'updated_at'
        ]


class VariantWriteSerializer(serializers.Serializer):
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.all(), required=False)
    product_size = serializers.PrimaryKeyRelatedField(queryset=ProductSize.objects.all(), required=False)
    color = serializers.PrimaryKeyRelatedField(
        queryset=Color.objects.all(), required=False, allow_null=True
    )
    stock_quantity = serializers.IntegerField(required=False)
    is_available = serializers.BooleanField(required=False)
    variant_code = serializers.CharField(required=False, allow_blank=True, max_length=100)
    expected_updated_at = serializers.DateTimeField(required=False)


# =============================================================================
# Price History Serializer
# =============================================================================

class PriceHistorySerializer(serializers.ModelSerializer):
    product = serializers.IntegerField(source='product_price.product_id', read_only=True)
    size = serializers.CharField(source='product_price.product_size.name', read_only=True)
    price_difference = serializers.DecimalField(
        max_digits=10, decimal_places=2, read_only=True
    )
    percentage_change = serializers.FloatField(read_only=True)

    class Meta:
        model = PriceHistory
        fields = [
            'id', 'product_price', 'product', 'size',
            'old_price', 'new_price', 'price_difference', 'percentage_change',
            'changed_at'
        ]
