"""
Django signals for the catalog app.
Handles automatic creation of price history records and removal of
stored image files.
"""

import logging

from django.db.models.signals import post_delete, pre_save
from django.dispatch import receiver

from .models import PriceHistory, ProductImage, ProductPrice

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=ProductPrice)
def track_price_changes(sender, instance, **kwargs):
    """
    Create PriceHistory records when a size price changes.
    """
    if not instance.pk:
        # New price, no history to track
        return

    old_price = ProductPrice.objects.filter(pk=instance.pk).values_list('price', flat=True).first()
    if old_price is None or old_price == instance.price:
        return

    PriceHistory.objects.create(
        product_price=instance,
        old_price=old_price,
        new_price=instance.price,
    )
    logger.info(
        "Price of product %s size %s changed: %s -> %s",
        instance.product_id, instance.product_size_id, old_price, instance.price,
    )


@receiver(post_delete, sender=ProductImage)
def delete_image_file(sender, instance, **kwargs):
    """Remove the stored file once its row is gone."""
    if instance.image:
        instance.image.delete(save=False)
