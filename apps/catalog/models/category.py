from django.db import models


class Category(models.Model):
    """
    Product categories shown in the catalog filter bar.
    Examples: Camas, Almofadas, Tapetes
    """
    name = models.CharField(
        max_length=200,
        unique=True,
        verbose_name='Nome'
    )
    description = models.TextField(
        blank=True,
        verbose_name='Descrição'
    )
    icon = models.CharField(
        max_length=20,
        blank=True,
        verbose_name='Ícone',
        help_text='Emoji exibido ao lado do nome'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Categoria'
        verbose_name_plural = 'Categorias'

    def __str__(self):
        return f"{self.icon} {self.name}".strip()

    @property
    def product_count(self):
        return self.products.count()
