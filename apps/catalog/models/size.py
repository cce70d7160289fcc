from django.db import models


class SizeFields(models.Model):
    """Dimension fields shared by the global and the per-product sizes."""
    name = models.CharField(
        max_length=20,
        verbose_name='Nome',
        help_text='Ex: P, M, G, GG'
    )
    dimensions = models.CharField(
        max_length=100,
        blank=True,
        verbose_name='Dimensões',
        help_text='Ex: 50x40x17cm'
    )
    width_cm = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Largura (cm)'
    )
    height_cm = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Altura (cm)'
    )
    depth_cm = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Profundidade (cm)'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ['display_order', 'name']

    def __str__(self):
        if self.dimensions:
            return f"{self.name} ({self.dimensions})"
        return self.name


class Size(SizeFields):
    """
    Global size reference table.
    Kept as a standalone catalog of sizes; prices, variants and the public
    catalog use ProductSize instead.
    """

    class Meta(SizeFields.Meta):
        verbose_name = 'Tamanho'
        verbose_name_plural = 'Tamanhos'


class ProductSize(SizeFields):
    """
    Size owned by a single product.
    Every ProductPrice and ProductVariant points to one of these.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='sizes',
        verbose_name='Produto'
    )

    class Meta(SizeFields.Meta):
        unique_together = ['product', 'name']
        verbose_name = 'Tamanho do Produto'
        verbose_name_plural = 'Tamanhos dos Produtos'
