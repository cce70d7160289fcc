import pytest
from django.core.management import call_command

from apps.catalog.models import Category, Color, Product, ProductVariant, Size


@pytest.mark.django_db
def test_seed_catalog_is_idempotent():
    call_command('seed_catalog')
    call_command('seed_catalog')

    assert Category.objects.count() == 3
    assert Color.objects.count() == 4
    assert Size.objects.count() == 4
    assert Product.objects.count() == 3
    # 4 sizes x (2 + 1 + 1) colors
    assert ProductVariant.objects.count() == 16
    assert Product.objects.get(name='Tapete Personalizado').is_custom_order
