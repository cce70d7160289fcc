"""
Variant manager: create, edit and delete ProductVariant rows.

Codes come from the CodeGenerator. When the generator fails the variant
still gets a timestamp-based placeholder code (``VAR-<epoch ms>``) and a
warning is logged.
"""

import logging
import time
from typing import Optional

from django.db import DatabaseError, IntegrityError, transaction

from apps.catalog.models import Color, Product, ProductSize, ProductVariant
from apps.catalog.models.variant import VARIANT_CODE_CONSTRAINT
from config.exceptions import (
    DuplicateVariantCodeError,
    InvalidQuantityError,
    MissingFieldError,
    StoreError,
    UnknownSizeError,
)

from .codes import CodeGenerationError, CodeGenerator
from .versioning import ensure_current

logger = logging.getLogger(__name__)

_UNSET = object()


def is_variant_code_conflict(exc: IntegrityError) -> bool:
    """True when the integrity error comes from the variant code constraint."""
    message = str(exc)
    if VARIANT_CODE_CONSTRAINT in message:
        return True
    # SQLite reports the column instead of the constraint name
    return 'UNIQUE' in message.upper() and 'variant_code' in message


class VariantService:

    def __init__(self, code_generator: Optional[CodeGenerator] = None):
        self.code_generator = code_generator or CodeGenerator()

    @staticmethod
    def list_variants(product: Optional[Product] = None):
        """Variants joined with product, color and size, newest first."""
        queryset = ProductVariant.objects.select_related(
            'product', 'product__category', 'color', 'product_size'
        ).order_by('-created_at', '-id')
        if product is not None:
            queryset = queryset.filter(product=product)
        return queryset

    def create_variant(
        self,
        product: Product,
        product_size: ProductSize,
        color: Optional[Color] = None,
        stock_quantity: int = 0,
        is_available: bool = True,
        variant_code: Optional[str] = None,
    ) -> ProductVariant:
        self._validate(product, product_size, stock_quantity)

        code = (variant_code or '').strip() or self.assign_code(product, product_size, color)
        variant = ProductVariant(
            product=product,
            product_size=product_size,
            color=color,
            variant_code=code,
            stock_quantity=stock_quantity,
            is_available=is_available,
        )
        self._persist(variant)
        logger.info("Created variant %s for product %s", variant.variant_code, product.pk)
        return variant

    def update_variant(
        self,
        variant: ProductVariant,
        product: Optional[Product] = None,
        product_size: Optional[ProductSize] = None,
        color=_UNSET,
        stock_quantity: Optional[int] = None,
        is_available: Optional[bool] = None,
        expected_updated_at=None,
    ) -> ProductVariant:
        """
        Apply changes and re-request the code from the generator.

        Unchanged product/size/color give back the same code.
        """
        product = product or variant.product
        product_size = product_size or variant.product_size
        color = variant.color if color is _UNSET else color
        stock_quantity = variant.stock_quantity if stock_quantity is None else stock_quantity
        self._validate(product, product_size, stock_quantity)

        variant.product = product
        variant.product_size = product_size
        variant.color = color
        variant.stock_quantity = stock_quantity
        if is_available is not None:
            variant.is_available = is_available
        variant.variant_code = self.assign_code(product, product_size, color)

        self._persist(variant, expected_updated_at=expected_updated_at)
        logger.info("Updated variant %s (%s)", variant.pk, variant.variant_code)
        return variant

    @staticmethod
    def delete_variant(variant: ProductVariant):
        code = variant.variant_code
        try:
            variant.delete()
        except DatabaseError as exc:
            logger.exception("Failed to delete variant %s", code)
            raise StoreError('Ocorreu um erro ao excluir a variante.') from exc
        logger.info("Deleted variant %s", code)

    def assign_code(self, product, product_size, color=None) -> str:
        try:
            return self.code_generator.generate_variant_code(product, product_size, color)
        except CodeGenerationError:
            code = f'VAR-{int(time.time() * 1000)}'
            logger.warning(
                "Variant code generation failed for product %s; using placeholder %s",
                product.pk, code, exc_info=True,
            )
            return code

    @staticmethod
    def _validate(product, product_size, stock_quantity):
        if product is None or product_size is None:
            raise MissingFieldError('Produto e tamanho são obrigatórios.')
        if product_size.product_id != product.pk:
            raise UnknownSizeError()
        if stock_quantity is None or stock_quantity < 0:
            raise InvalidQuantityError()

    @staticmethod
    def _persist(variant: ProductVariant, expected_updated_at=None):
        try:
            with transaction.atomic():
                if variant.pk:
                    ensure_current(ProductVariant, variant.pk, expected_updated_at)
                variant.save()
        except IntegrityError as exc:
            if is_variant_code_conflict(exc):
                logger.info("Duplicate variant code %s rejected", variant.variant_code)
                raise DuplicateVariantCodeError() from exc
            logger.exception("Failed to save variant %s", variant.variant_code)
            raise StoreError('Ocorreu um erro ao salvar a variante.') from exc
        except DatabaseError as exc:
            logger.exception("Failed to save variant %s", variant.variant_code)
            raise StoreError('Ocorreu um erro ao salvar a variante.') from exc
