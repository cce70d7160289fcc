from decimal import Decimal

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction

from apps.catalog.admin import VariantResource
from apps.catalog.models import Product, ProductPrice, ProductVariant
from apps.catalog.services import VariantService


@pytest.mark.django_db
@pytest.mark.parametrize('url', [
    '/admin/catalog/category/',
    '/admin/catalog/color/',
    '/admin/catalog/size/',
    '/admin/catalog/product/',
    '/admin/catalog/productvariant/',
    '/admin/catalog/pricehistory/',
    '/admin/accounts/adminprofile/',
    '/admin/contact/contactmessage/',
])
def test_changelists_render(admin_client, cama_luxo, url):
    response = admin_client.get(url)

    assert response.status_code == 200


@pytest.mark.django_db
def test_product_change_page_renders(admin_client, cama_luxo):
    response = admin_client.get(f'/admin/catalog/product/{cama_luxo.pk}/change/')

    assert response.status_code == 200
    assert b'CAM-0001' in response.content


@pytest.mark.django_db
def test_variant_export_rows(cama_luxo, azul):
    VariantService().create_variant(cama_luxo, cama_luxo.sizes.get(name='M'), azul, stock_quantity=2)

    dataset = VariantResource().export()

    assert dataset.headers[:4] == ['variant_code', 'product_code', 'size', 'color']
    assert dataset[0][:4] == ('CAM-0001-M-AZUL-MARINHO', 'CAM-0001', 'M', 'Azul Marinho')


@pytest.mark.django_db
def test_product_history_page(admin_client, editor, cama_luxo):
    editor.save_product({'name': 'Cama Luxo Premium'}, product=cama_luxo)

    response = admin_client.get(f'/admin/catalog/product/{cama_luxo.pk}/history/')

    assert response.status_code == 200
    assert Product.history.filter(id=cama_luxo.pk).count() == 2
    assert not ProductVariant.objects.exists()


def empty_inlines(*prefixes):
    data = {}
    for prefix in prefixes:
        data[f'{prefix}-TOTAL_FORMS'] = '0'
        data[f'{prefix}-INITIAL_FORMS'] = '0'
    return data


@pytest.mark.django_db
def test_admin_add_product_creates_default_sizes(admin_client, camas):
    response = admin_client.post('/admin/catalog/product/add/', {
        'name': 'Cama Admin',
        'category': camas.pk,
        'description': '',
        'status': Product.STATUS_ACTIVE,
        'observations': '',
        **empty_inlines('sizes', 'prices', 'images', 'variants'),
    })

    assert response.status_code == 302
    product = Product.objects.get(name='Cama Admin')
    assert product.product_code == 'CAM-0001'
    assert list(product.sizes.values_list('name', flat=True)) == ['P', 'M', 'G', 'GG']
    assert set(product.prices.values_list('price', flat=True)) == {Decimal('100.00')}


@pytest.mark.django_db
def test_admin_duplicate_variant_is_a_form_error(admin_client, cama_luxo, azul):
    size = cama_luxo.sizes.get(name='M')
    VariantService().create_variant(cama_luxo, size, azul)

    response = admin_client.post('/admin/catalog/productvariant/add/', {
        'product': cama_luxo.pk,
        'product_size': size.pk,
        'color': azul.pk,
        'stock_quantity': '3',
        'is_available': 'on',
    })

    assert response.status_code == 200
    assert 'Já existe uma variante com este código' in response.content.decode()
    assert ProductVariant.objects.count() == 1


@pytest.mark.django_db
def test_admin_variant_size_of_other_product(admin_client, editor, camas, cama_luxo):
    other = editor.save_product({'name': 'Cama Simples', 'category': camas.pk})

    response = admin_client.post('/admin/catalog/productvariant/add/', {
        'product': cama_luxo.pk,
        'product_size': other.sizes.get(name='M').pk,
        'stock_quantity': '0',
    })

    assert response.status_code == 200
    assert not ProductVariant.objects.exists()


@pytest.mark.django_db
@pytest.mark.parametrize('value', [Decimal('0'), Decimal('-5.00')])
def test_non_positive_price_is_rejected_by_model(cama_luxo, value):
    price = cama_luxo.prices.get(product_size__name='M')
    price.price = value

    with pytest.raises(ValidationError):
        price.full_clean()

    with pytest.raises(IntegrityError):
        with transaction.atomic():
            price.save()

    assert ProductPrice.objects.get(pk=price.pk).price == Decimal('100.00')
