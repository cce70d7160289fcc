"""
Catalog assembler: the public, read-only product listing.

Builds display-ready entries for active products. Color and size
selections only affect the returned entries; nothing is written.
"""

import logging
from typing import List, Optional
from urllib.parse import quote

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Prefetch

from apps.catalog.models import Category, Product, ProductImage, ProductPrice, ProductVariant
from config.exceptions import StoreError

logger = logging.getLogger(__name__)

CUSTOM_ORDER_LABEL = 'Sob encomenda'
WHATSAPP_URL = 'https://wa.me/{number}?text={text}'


class CatalogService:

    def list_products(
        self,
        category: Optional[str] = None,
        color_id: Optional[int] = None,
        size: Optional[str] = None,
    ) -> List[dict]:
        """
        Active products, newest first, optionally filtered by category name.

        Any read failure aborts the whole listing.
        """
        queryset = self.active_products()
        if category:
            queryset = queryset.filter(category__name=category)

        try:
            products = list(queryset)
        except DatabaseError as exc:
            logger.exception("Failed to load catalog (category=%r)", category)
            raise StoreError('Não foi possível carregar o catálogo.') from exc

        return [self.build_entry(product, color_id=color_id, size=size) for product in products]

    def get_product(self, pk, color_id=None, size=None) -> Optional[dict]:
        try:
            product = self.active_products().filter(pk=pk).first()
        except DatabaseError as exc:
            logger.exception("Failed to load catalog product %s", pk)
            raise StoreError('Não foi possível carregar o produto.') from exc
        if product is None:
            return None
        return self.build_entry(product, color_id=color_id, size=size)

    @staticmethod
    def active_products():
        return (
            Product.objects.filter(status=Product.STATUS_ACTIVE)
            .select_related('category')
            .prefetch_related(
                Prefetch(
                    'images',
                    queryset=ProductImage.objects.select_related('color').order_by('display_order', 'id'),
                ),
                Prefetch(
                    'prices',
                    queryset=ProductPrice.objects.select_related('product_size'),
                ),
            )
            .order_by('-created_at', '-id')
        )

    @staticmethod
    def list_categories():
        try:
            return list(Category.objects.order_by('name'))
        except DatabaseError as exc:
            logger.exception("Failed to load catalog categories")
            raise StoreError('Não foi possível carregar as categorias.') from exc

    # =========================================================================
    # Entry assembly
    # =========================================================================

    def build_entry(self, product: Product, color_id=None, size=None) -> dict:
        images = [image for image in product.images.all() if image.is_available]
        threshold = settings.CATALOG['LOW_STOCK_THRESHOLD']

        prices = sorted(
            product.prices.all(),
            key=lambda p: (p.product_size.display_order, p.product_size.name),
        )
        price_entries = [
            {
                'size': price.product_size.name,
                'product_size': price.product_size_id,
                'dimensions': price.product_size.dimensions,
                'price': price.price,
                'is_selected': size is not None and price.product_size.name == size,
            }
            for price in prices
        ]
        selected_price = next((p for p in price_entries if p['is_selected']), None)

        colors = []
        seen = set()
        for image in images:
            if image.color_id and image.color_id not in seen:
                seen.add(image.color_id)
                colors.append({
                    'id': image.color_id,
                    'name': image.color.name,
                    'hex_code': image.color.hex_code,
                })

        return {
            'id': product.pk,
            'name': product.name,
            'description': product.description,
            'product_code': product.product_code,
            'category': product.category.name,
            'category_icon': product.category.icon,
            'observations': product.observations,
            'is_custom_order': product.is_custom_order,
            'custom_order_label': CUSTOM_ORDER_LABEL if product.is_custom_order else None,
            'image_url': self.select_image(images, color_id),
            'images': [
                {
                    'id': image.pk,
                    'url': image.image_url,
                    'alt_text': image.alt_text,
                    'color': image.color_id,
                    'is_low_stock': image.is_low_stock(threshold),
                }
                for image in images
            ],
            'colors': colors,
            'prices': price_entries,
            'selected_color': color_id,
            'selected_size': size,
            'selected_price': selected_price,
        }

    @staticmethod
    def select_image(images, color_id=None) -> str:
        """
        Image for the selected color, else the first image, else the placeholder.
        """
        if color_id is not None:
            for image in images:
                if image.color_id == color_id:
                    return image.image_url
        if images:
            return images[0].image_url
        return settings.CATALOG['PLACEHOLDER_IMAGE']

    # =========================================================================
    # WhatsApp order link
    # =========================================================================

    @staticmethod
    def whatsapp_link(product: Product, size: Optional[str] = None) -> str:
        """
        Link that opens a WhatsApp chat with the product pre-filled.

        With a size, the code of a variant in that size is used; otherwise
        (or when no such variant exists) the first 8 characters of the
        product code.
        """
        code = product.product_code[:8]
        name = product.name
        if size:
            name = f'{product.name} (tamanho {size})'
            variant = (
                ProductVariant.objects.filter(product=product, product_size__name=size)
                .order_by('created_at', 'id')
                .first()
            )
            if variant is not None:
                code = variant.variant_code

        text = f'Olá! Tenho interesse no produto: {name}\nCódigo: {code}'
        return WHATSAPP_URL.format(number=settings.WHATSAPP_NUMBER, text=quote(text))
