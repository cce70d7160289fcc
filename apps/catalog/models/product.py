from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from simple_history.models import HistoricalRecords


class Product(models.Model):
    """
    Base product of the catalog.
    Example: "Cama Luxo", sold in sizes P/M/G/GG with one price per size.

    A product owns its sizes, prices, images and variants; deleting it
    removes all of them.
    """
    STATUS_ACTIVE = 'active'
    STATUS_INACTIVE = 'inactive'
    STATUS_DRAFT = 'draft'
    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Ativo'),
        (STATUS_INACTIVE, 'Inativo'),
        (STATUS_DRAFT, 'Rascunho'),
    ]

    name = models.CharField(
        max_length=255,
        verbose_name='Nome'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    product_code = models.CharField(
        max_length=50,
        unique=True,
        verbose_name='Código',
        help_text='Gerado automaticamente a partir da categoria'
    )
    category = models.ForeignKey(
        'catalog.Category',
        on_delete=models.PROTECT,
        related_name='products',
        verbose_name='Categoria'
    )
    observations = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Observações',
        help_text='Ex: Sob encomenda, Promoção'
    )
    is_custom_order = models.BooleanField(
        default=False,
        verbose_name='Sob encomenda'
    )
    status = models.CharField(
        max_length=10,
        choices=STATUS_CHOICES,
        default=STATUS_ACTIVE,
        verbose_name='Status'
    )

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
        verbose_name = 'Produto'
        verbose_name_plural = 'Produtos'

    def __str__(self):
        return f"{self.product_code} - {self.name}"

    @property
    def is_active(self):
        return self.status == self.STATUS_ACTIVE

    @property
    def variant_count(self):
        return self.variants.count()

    @property
    def price_range(self):
        """Return price range string."""
        prices = [p.price for p in self.prices.all()]
        if not prices:
            return None
        min_p, max_p = min(prices), max(prices)
        if min_p == max_p:
            return f"R$ {min_p:.2f}"
        return f"R$ {min_p:.2f} - R$ {max_p:.2f}"


class ProductPrice(models.Model):
    """One price per (product, size)."""
    product = models.ForeignKey(
        Product,
        on_delete=models.CASCADE,
        related_name='prices',
        verbose_name='Produto'
    )
    product_size = models.ForeignKey(
        'catalog.ProductSize',
        on_delete=models.CASCADE,
        related_name='prices',
        verbose_name='Tamanho'
    )
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        verbose_name='Preço'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['product_size__display_order', 'product_size__name']
        unique_together = ['product', 'product_size']
        constraints = [
            models.CheckConstraint(check=models.Q(price__gt=0), name='product_prices_price_positive'),
        ]
        verbose_name = 'Preço'
        verbose_name_plural = 'Preços'

    def __str__(self):
        return f"{self.product.name} {self.product_size.name}: R$ {self.price:.2f}"
