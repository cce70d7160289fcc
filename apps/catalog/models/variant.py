from django.db import models
from simple_history.models import HistoricalRecords

# Constraint name reported by the database on duplicate variant codes
VARIANT_CODE_CONSTRAINT = 'product_variants_variant_code_key'


class ProductVariant(models.Model):
    """
    A size + color combination of a product, with its own stock and code.
    The code is unique across the whole store.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='variants',
        verbose_name='Produto'
    )
    product_size = models.ForeignKey(
        'catalog.ProductSize',
        on_delete=models.RESTRICT,
        related_name='variants',
        verbose_name='Tamanho'
    )
    color = models.ForeignKey(
        'catalog.Color',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='variants',
        verbose_name='Cor'
    )
    variant_code = models.CharField(
        max_length=100,
        verbose_name='Código da variante'
    )

    # Inventory
    stock_quantity = models.PositiveIntegerField(
        default=0,
        verbose_name='Quantidade em estoque'
    )
    is_available = models.BooleanField(
        default=True,
        verbose_name='Disponível'
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Criado em'
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name='Atualizado em'
    )

    # History tracking
    history = HistoricalRecords()

    class Meta:
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['variant_code'],
                name=VARIANT_CODE_CONSTRAINT,
            ),
        ]
        verbose_name = 'Variante'
        verbose_name_plural = 'Variantes'

    def __str__(self):
        return self.variant_code

    @property
    def is_in_stock(self):
        return self.is_available and self.stock_quantity > 0

    @property
    def description(self):
        parts = [self.product.name, self.product_size.name]
        if self.color_id:
            parts.append(self.color.name)
        return ' / '.join(parts)
