import os

from django.db import models
from imagekit.models import ProcessedImageField, ImageSpecField
from imagekit.processors import ResizeToFill, ResizeToFit


def product_image_path(instance, filename):
    """products/<product id>/<color id or "none">/<filename>"""
    color = instance.color_id or 'none'
    return os.path.join('products', str(instance.product_id), str(color), filename)


class ProductImage(models.Model):
    """
    Product image, optionally tagged with a color.
    Images without a color form the "no color" bucket.
    """
    product = models.ForeignKey(
        'catalog.Product',
        on_delete=models.CASCADE,
        related_name='images',
        verbose_name='Produto'
    )
    color = models.ForeignKey(
        'catalog.Color',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='product_images',
        verbose_name='Cor'
    )
    image_url = models.CharField(
        max_length=500,
        verbose_name='URL da imagem'
    )
    image = ProcessedImageField(
        upload_to=product_image_path,
        processors=[ResizeToFit(1200, 1200)],
        format='JPEG',
        options={'quality': 85},
        blank=True,
        verbose_name='Arquivo'
    )
    thumbnail = ImageSpecField(
        source='image',
        processors=[ResizeToFill(300, 300)],
        format='JPEG',
        options={'quality': 70}
    )
    alt_text = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Texto alternativo'
    )
    display_order = models.PositiveIntegerField(
        default=0,
        verbose_name='Ordem de exibição'
    )
    is_available = models.BooleanField(
        default=True,
        verbose_name='Disponível'
    )
    stock_quantity = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name='Quantidade em estoque'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['display_order', 'id']
        verbose_name = 'Imagem do Produto'
        verbose_name_plural = 'Imagens dos Produtos'

    def __str__(self):
        return f"{self.product.name} - Imagem {self.display_order}"

    def save(self, *args, **kwargs):
        if not self.alt_text:
            if self.color_id:
                self.alt_text = f"{self.product.name} - {self.color.name}"
            else:
                self.alt_text = self.product.name
        super().save(*args, **kwargs)
        # Files uploaded through the admin only get a URL once stored
        if self.image and not self.image_url:
            self.image_url = self.image.url
            super().save(update_fields=['image_url'])

    def is_low_stock(self, threshold):
        return self.stock_quantity is not None and self.stock_quantity <= threshold
