import json

from rest_framework import viewsets, filters, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend
from django.db.models import Prefetch

from apps.catalog.models import (
    Category,
    Color,
    Size,
    ProductSize,
    Product,
    ProductPrice,
    ProductImage,
    PriceHistory,
)
from apps.catalog.services import CatalogService, ProductEditorService, VariantService
from apps.contact.models import ContactMessage
from config.exceptions import ProductNotFoundError, ValidationError
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
    PriceInputSerializer,
    VariantSerializer,
    VariantWriteSerializer,
    PriceHistorySerializer,
)
from .filters import ProductFilter, VariantFilter, PriceHistoryFilter


def parse_image_buckets(files):
    """
    Group uploaded files by color.

    ``images`` holds the "no color" bucket, ``images_<color id>`` one bucket
    per color.
    """
    buckets = {}
    for key in files:
        if key == 'images':
            color_id = None
        elif key.startswith('images_'):
            try:
                color_id = int(key[len('images_'):])
            except ValueError:
                raise ValidationError(f'Campo de imagem inválido: {key}')
        else:
            continue
        buckets.setdefault(color_id, []).extend(files.getlist(key))
    return buckets


# =============================================================================
# Reference Data
# =============================================================================

class CategoryViewSet(viewsets.ModelViewSet):
    """
    API endpoint for categories.
    Deleting a category that still has products returns 409.
    """
    queryset = Category.objects.all()
    serializer_class = CategorySerializer
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering = ['name']


class ColorViewSet(viewsets.ModelViewSet):
    """
    API endpoint for colors.
    hex_code must match #RRGGBB.
    """
    queryset = Color.objects.all()
    serializer_class = ColorSerializer
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'hex_code']
    ordering = ['name']


class SizeViewSet(viewsets.ModelViewSet):
    """
    API endpoint for the global size table.
    """
    queryset = Size.objects.all()
    serializer_class = SizeSerializer
    filter_backends = [filters.OrderingFilter]
    ordering = ['display_order', 'name']


# =============================================================================
# Products
# =============================================================================

class ProductViewSet(viewsets.ModelViewSet):
    """
    API endpoint for products.

    list: Admin product table
    retrieve: Product with sizes, prices and images
    create: Create the product aggregate (JSON, or multipart with a
        ``payload`` JSON field plus ``images`` / ``images_<color id>`` files)
    update: Update the product; only submitted prices change
    delete: Delete the product with everything it owns
    """
    queryset = Product.objects.select_related('category')
    filterset_class = ProductFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'description', 'product_code']
    ordering_fields = ['name', 'product_code', 'created_at', 'updated_at']
    ordering = ['-created_at']

    editor_class = ProductEditorService

    def get_serializer_class(self):
        if self.action == 'list':
            return ProductListSerializer
        return ProductDetailSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        if self.action == 'list':
            return queryset.prefetch_related('prices')
        return queryset.prefetch_related(
            'sizes',
            Prefetch('prices', queryset=ProductPrice.objects.select_related('product_size')),
            Prefetch('images', queryset=ProductImage.objects.select_related('color')),
        )

    def get_editor(self):
        return self.editor_class()

    def _read_payload(self, request):
        data = request.data
        if 'payload' in data:
            try:
                data = json.loads(data['payload'])
            except (TypeError, ValueError):
                raise ValidationError('Campo payload deve conter JSON válido.')

        serializer = ProductWriteSerializer(data=data)
        serializer.is_valid(raise_exception=True)
        values = dict(serializer.validated_data)
        if 'prices' in values:
            values['prices'] = [dict(entry) for entry in values['prices']]
        expected_updated_at = values.pop('expected_updated_at', None)
        return values, parse_image_buckets(request.FILES), expected_updated_at

    def _detail_response(self, product, status_code=status.HTTP_200_OK):
        product = self.get_queryset().get(pk=product.pk)
        serializer = ProductDetailSerializer(product, context=self.get_serializer_context())
        return Response(serializer.data, status=status_code)

    def create(self, request, *args, **kwargs):
        values, images, _ = self._read_payload(request)
        product = self.get_editor().save_product(values, images=images)
        return self._detail_response(product, status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        product = self.get_object()
        values, images, expected_updated_at = self._read_payload(request)
        product = self.get_editor().save_product(
            values,
            images=images,
            product=product,
            expected_updated_at=expected_updated_at,
        )
        return self._detail_response(product)

    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        self.get_editor().delete_product(product)
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=['get', 'post'])
    def sizes(self, request, pk=None):
        """List the product sizes or add a new one."""
        product = self.get_object()
        if request.method == 'POST':
            serializer = ProductSizeSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            size = self.get_editor().add_size(product, serializer.validated_data)
            return Response(ProductSizeSerializer(size).data, status=status.HTTP_201_CREATED)
        return Response(ProductSizeSerializer(product.sizes.all(), many=True).data)

    @action(detail=True, methods=['get', 'put'])
    def prices(self, request, pk=None):
        """
        Get or upsert size prices.

        Expected payload:
        {
            "prices": [
                {"size": "M", "price": "149.90"},
                {"product_size": 12, "price": "180.00"}
            ]
        }
        """
        product = self.get_object()
        if request.method == 'PUT':
            serializer = PriceInputSerializer(data=request.data.get('prices', []), many=True)
            serializer.is_valid(raise_exception=True)
            self.get_editor().set_prices(product, [dict(entry) for entry in serializer.validated_data])
        prices = product.prices.select_related('product_size')
        return Response(ProductPriceSerializer(prices, many=True).data)

    @action(detail=True, methods=['get', 'post'])
    def images(self, request, pk=None):
        """List the product images or upload new ones per color."""
        product = self.get_object()
        context = self.get_serializer_context()
        if request.method == 'POST':
            images = parse_image_buckets(request.FILES)
            if not images:
                raise ValidationError('Nenhuma imagem enviada.')
            created = self.get_editor().attach_images(product, images)
            return Response(
                ProductImageSerializer(created, many=True, context=context).data,
                status=status.HTTP_201_CREATED
            )
        images = product.images.select_related('color')
        return Response(ProductImageSerializer(images, many=True, context=context).data)


class ProductSizeViewSet(viewsets.ModelViewSet):
    """
    API endpoint for per-product sizes.
    Deleting a size also deletes its price; sizes used by variants return 409.
    """
    queryset = ProductSize.objects.select_related('product')
    serializer_class = ProductSizeSerializer
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    filterset_fields = ['product']
    ordering = ['product', 'display_order', 'name']

    def create(self, request, *args, **kwargs):
        try:
            product = Product.objects.get(pk=request.data.get('product'))
        except (Product.DoesNotExist, ValueError, TypeError):
            raise ProductNotFoundError()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        size = ProductEditorService.add_size(product, serializer.validated_data)
        return Response(self.get_serializer(size).data, status=status.HTTP_201_CREATED)

    def perform_update(self, serializer):
        ProductEditorService.update_size(serializer.instance, serializer.validated_data)

    def perform_destroy(self, instance):
        ProductEditorService.delete_size(instance)


# =============================================================================
# Variants
# =============================================================================

class VariantViewSet(viewsets.ModelViewSet):
    """
    API endpoint for variants.

    Codes are assigned by the variant manager on create and on every edit;
    a repeated code returns 409 ``duplicate_variant_code``.
    """
    serializer_class = VariantSerializer
    filterset_class = VariantFilter
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    search_fields = ['variant_code', 'product__name']

    service_class = VariantService

    def get_queryset(self):
        return VariantService.list_variants()

    def get_service(self):
        return self.service_class()

    def create(self, request, *args, **kwargs):
        serializer = VariantWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        variant = self.get_service().create_variant(
            product=data.get('product'),
            product_size=data.get('product_size'),
            color=data.get('color'),
            stock_quantity=data.get('stock_quantity', 0),
            is_available=data.get('is_available', True),
            variant_code=data.get('variant_code'),
        )
        return Response(VariantSerializer(variant).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        variant = self.get_object()
        serializer = VariantWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        changes = {
            key: data[key]
            for key in ['product', 'product_size', 'color', 'stock_quantity',
                        'is_available', 'expected_updated_at']
            if key in data
        }
        variant = self.get_service().update_variant(variant, **changes)
        return Response(VariantSerializer(variant).data)

    def perform_destroy(self, instance):
        VariantService.delete_variant(instance)


class PriceHistoryViewSet(viewsets.ReadOnlyModelViewSet):
    """
    API endpoint for price history (read-only).
    """
    queryset = PriceHistory.objects.select_related('product_price__product_size')
    serializer_class = PriceHistorySerializer
    filterset_class = PriceHistoryFilter
    filter_backends = [DjangoFilterBackend, filters.OrderingFilter]
    ordering = ['-changed_at', '-id']


# =============================================================================
# Public catalog
# =============================================================================

class CatalogViewSet(viewsets.ViewSet):
    """
    Public product catalog.

    Query params:
    - category: category name
    - color: color id, picks the image shown for each product
    - size: size name, highlights that price
    """
    permission_classes = [AllowAny]
    lookup_value_regex = r'\d+'

    service_class = CatalogService

    def _selection(self, request):
        color = request.query_params.get('color')
        try:
            color_id = int(color) if color else None
        except ValueError:
            raise ValidationError('Parâmetro color deve ser um número.')
        return color_id, request.query_params.get('size') or None

    def list(self, request):
        color_id, size = self._selection(request)
        entries = self.service_class().list_products(
            category=request.query_params.get('category') or None,
            color_id=color_id,
            size=size,
        )
        return Response(entries)

    def retrieve(self, request, pk=None):
        color_id, size = self._selection(request)
        entry = self.service_class().get_product(pk, color_id=color_id, size=size)
        if entry is None:
            raise ProductNotFoundError()
        return Response(entry)

    @action(detail=True, methods=['get'])
    def whatsapp(self, request, pk=None):
        """WhatsApp order link for the product, optionally for one size."""
        product = Product.objects.filter(pk=pk, status=Product.STATUS_ACTIVE).first()
        if product is None:
            raise ProductNotFoundError()
        size = request.query_params.get('size') or None
        return Response({'url': self.service_class.whatsapp_link(product, size=size)})


class CatalogCategoryViewSet(viewsets.ReadOnlyModelViewSet):
    """Public category list for the catalog filter bar."""
    permission_classes = [AllowAny]
    serializer_class = CategorySerializer

    def get_queryset(self):
        return Category.objects.order_by('name')


class DashboardStatsView(APIView):
    """Counters for the admin dashboard."""

    def get(self, request):
        return Response({
            'total_products': Product.objects.count(),
            'active_products': Product.objects.filter(status=Product.STATUS_ACTIVE).count(),
            'categories': Category.objects.count(),
            'colors': Color.objects.count(),
            'pending_messages': ContactMessage.objects.filter(
                status=ContactMessage.STATUS_PENDING
            ).count(),
        })
