"""
Human-readable codes for products and variants.

Product codes are sequential per category prefix: ``CAM-0001``,
``CAM-0002``. Variant codes are derived from the product code, the size
name and the color name (``CAM-0001-M-AZUL``), so identical inputs always
produce the same code and the store's unique constraint rejects repeats.
"""

import logging
import re
from typing import Optional

from django.db import DatabaseError
from django.utils.text import slugify

from apps.catalog.models import Category, Color, Product, ProductSize

logger = logging.getLogger(__name__)


class CodeGenerationError(Exception):
    """A code could not be produced for the given inputs."""


def _segment(text: str) -> str:
    return slugify(text).upper()


class CodeGenerator:
    """
    Deterministic code generator for products and variants.
    """
    prefix_length = 3
    sequence_digits = 4
    fallback_prefix = 'PRD'

    def category_prefix(self, category: Category) -> str:
        prefix = _segment(category.name).replace('-', '')[:self.prefix_length]
        return prefix or self.fallback_prefix

    def generate_product_code(self, category: Category) -> str:
        """
        Next free code for the category prefix.

        Example:
            Category "Camas" with CAM-0001 and CAM-0002 taken -> "CAM-0003"
        """
        if category is None:
            raise CodeGenerationError('Categoria é obrigatória para gerar o código do produto')

        prefix = self.category_prefix(category)
        pattern = re.compile(rf'^{re.escape(prefix)}-(\d+)$')
        try:
            existing = list(
                Product.objects.filter(product_code__startswith=f'{prefix}-')
                .values_list('product_code', flat=True)
            )
        except DatabaseError as exc:
            raise CodeGenerationError(f'Falha ao consultar códigos com prefixo {prefix}') from exc

        highest = 0
        for code in existing:
            match = pattern.match(code)
            if match:
                highest = max(highest, int(match.group(1)))

        code = f'{prefix}-{highest + 1:0{self.sequence_digits}d}'
        logger.debug("Generated product code %s for category %s", code, category.pk)
        return code

    def generate_variant_code(
        self,
        product: Product,
        product_size: ProductSize,
        color: Optional[Color] = None
    ) -> str:
        """
        Code for a size + color combination of a product.

        Example:
            ("CAM-0001", "M", "Azul Marinho") -> "CAM-0001-M-AZUL-MARINHO"
        """
        if not product.product_code:
            raise CodeGenerationError(f'Produto {product.pk} não possui código')
        if product_size is None or not product_size.name:
            raise CodeGenerationError('Tamanho é obrigatório para gerar o código da variante')

        parts = [product.product_code, _segment(product_size.name)]
        if color is not None:
            parts.append(_segment(color.name))
        return '-'.join(part for part in parts if part)
