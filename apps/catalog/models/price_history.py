from django.db import models


class PriceHistory(models.Model):
    """
    Track price changes per product size for audit purposes.
    Automatically created when a ProductPrice changes.
    """
    product_price = models.ForeignKey(
        'catalog.ProductPrice',
        on_delete=models.CASCADE,
        related_name='history',
        verbose_name='Preço'
    )
    old_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Preço anterior'
    )
    new_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name='Novo preço'
    )
    changed_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name='Alterado em'
    )

    class Meta:
        ordering = ['-changed_at', '-id']
        verbose_name = 'Histórico de Preço'
        verbose_name_plural = 'Histórico de Preços'

    def __str__(self):
        return f"{self.product_price}: {self.old_price} → {self.new_price}"

    @property
    def price_difference(self):
        if self.old_price is None or self.new_price is None:
            return None
        return self.new_price - self.old_price

    @property
    def percentage_change(self):
        if self.old_price is None or self.old_price == 0:
            return None
        diff = self.price_difference
        if diff is None:
            return None
        return (diff / self.old_price) * 100
