from datetime import timedelta
from decimal import Decimal

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from apps.catalog.models import Product, ProductImage, ProductPrice, ProductSize
from apps.catalog.services import CodeGenerationError, CodeGenerator, ProductEditorService, VariantService
from config.exceptions import (
    CategoryNotFoundError,
    ColorNotFoundError,
    DuplicateResourceError,
    InvalidImageError,
    InvalidPriceError,
    InvalidStatusError,
    MissingFieldError,
    ResourceInUseError,
    StaleWriteError,
    StoreError,
    UnknownSizeError,
)


def prices_by_size(product):
    return {
        price.product_size.name: price.price
        for price in ProductPrice.objects.filter(product=product).select_related('product_size')
    }


def stored_files(media_root):
    return [path for path in media_root.rglob('*') if path.is_file()]


@pytest.mark.django_db
class TestLocalValidation:
    """Rejected input must not reach the database."""

    def test_non_positive_price_makes_no_queries(self, editor, camas, django_assert_num_queries):
        data = {'name': 'Cama Luxo', 'category': camas.pk, 'prices': [{'size': 'P', 'price': '0'}]}

        with django_assert_num_queries(0):
            with pytest.raises(InvalidPriceError):
                editor.save_product(data)

    def test_negative_price_on_edit_makes_no_queries(self, editor, cama_luxo, django_assert_num_queries):
        data = {'prices': [{'size': 'M', 'price': '-10.00'}]}

        with django_assert_num_queries(0):
            with pytest.raises(InvalidPriceError):
                editor.save_product(data, product=cama_luxo)

    def test_missing_name(self, editor, camas, django_assert_num_queries):
        with django_assert_num_queries(0):
            with pytest.raises(MissingFieldError):
                editor.save_product({'name': '   ', 'category': camas.pk})

    def test_missing_category(self, editor, django_assert_num_queries):
        with django_assert_num_queries(0):
            with pytest.raises(MissingFieldError):
                editor.save_product({'name': 'Cama Luxo'})

    def test_invalid_status(self, editor, camas):
        with pytest.raises(InvalidStatusError):
            editor.save_product({'name': 'Cama Luxo', 'category': camas.pk, 'status': 'archived'})

    def test_unknown_size_on_create(self, editor, camas):
        with pytest.raises(UnknownSizeError):
            editor.save_product({
                'name': 'Cama Luxo', 'category': camas.pk,
                'prices': [{'size': 'XG', 'price': '10.00'}],
            })

        assert not Product.objects.exists()

    def test_non_image_upload(self, editor, camas):
        document = SimpleUploadedFile('lista.txt', b'nao sou imagem', content_type='text/plain')

        with pytest.raises(InvalidImageError):
            editor.save_product({'name': 'Cama Luxo', 'category': camas.pk}, images={None: [document]})

        assert not Product.objects.exists()

    def test_corrupt_image_with_image_content_type(self, editor, camas, django_assert_num_queries):
        fake = SimpleUploadedFile('foto.png', b'nao sou um png de verdade', content_type='image/png')

        with django_assert_num_queries(0):
            with pytest.raises(InvalidImageError):
                editor.save_product({'name': 'Cama X', 'category': camas.pk}, images={None: [fake]})

    def test_valid_image_is_rewound_after_check(self, editor, camas, image_file):
        product = editor.save_product({'name': 'Cama X', 'category': camas.pk}, images={None: [image_file]})

        image = product.images.get()
        with Image.open(image.image.path) as stored:
            assert stored.format == 'JPEG'

    def test_oversized_image(self, editor, camas, settings, image_file):
        settings.CATALOG = {**settings.CATALOG, 'MAX_IMAGE_SIZE': 10}

        with pytest.raises(InvalidImageError):
            editor.save_product({'name': 'Cama Luxo', 'category': camas.pk}, images={None: [image_file]})

    def test_unknown_category(self, editor):
        with pytest.raises(CategoryNotFoundError):
            editor.save_product({'name': 'Cama Luxo', 'category': 999})


@pytest.mark.django_db
class TestCreateProduct:

    def test_code_and_default_sizes(self, cama_luxo):
        assert cama_luxo.product_code == 'CAM-0001'
        assert list(cama_luxo.sizes.values_list('name', flat=True)) == ['P', 'M', 'G', 'GG']
        assert prices_by_size(cama_luxo) == {
            'P': Decimal('100.00'),
            'M': Decimal('100.00'),
            'G': Decimal('100.00'),
            'GG': Decimal('100.00'),
        }

    def test_default_sizes_have_dimensions(self, cama_luxo):
        size = cama_luxo.sizes.get(name='P')

        assert size.dimensions == '50x40x17cm'
        assert (size.width_cm, size.height_cm, size.depth_cm) == (50, 40, 17)

    def test_submitted_prices_override_default(self, editor, camas):
        product = editor.save_product({
            'name': 'Cama Luxo', 'category': camas.pk,
            'prices': [{'size': 'GG', 'price': '249.90'}],
        })

        prices = prices_by_size(product)
        assert prices['GG'] == Decimal('249.90')
        assert prices['P'] == Decimal('100.00')

    def test_codes_are_sequential(self, editor, camas, cama_luxo):
        second = editor.save_product({'name': 'Cama Simples', 'category': camas.pk})

        assert second.product_code == 'CAM-0002'

    def test_code_generator_failure_is_a_store_error(self, camas):
        class BrokenGenerator(CodeGenerator):
            def generate_product_code(self, category):
                raise CodeGenerationError('sem conexão')

        editor = ProductEditorService(code_generator=BrokenGenerator())

        with pytest.raises(StoreError):
            editor.save_product({'name': 'Cama Luxo', 'category': camas.pk})

        assert not Product.objects.exists()

    def test_history_is_recorded(self, cama_luxo):
        assert cama_luxo.history.count() == 1


@pytest.mark.django_db
class TestEditProduct:

    def test_edit_one_price_leaves_others_unchanged(self, editor, cama_luxo):
        editor.save_product({'prices': [{'size': 'M', 'price': '149.90'}]}, product=cama_luxo)

        assert prices_by_size(cama_luxo) == {
            'P': Decimal('100.00'),
            'M': Decimal('149.90'),
            'G': Decimal('100.00'),
            'GG': Decimal('100.00'),
        }

    def test_price_by_product_size_id(self, editor, cama_luxo):
        size = cama_luxo.sizes.get(name='G')

        editor.save_product({'prices': [{'product_size': size.pk, 'price': '180.00'}]}, product=cama_luxo)

        assert prices_by_size(cama_luxo)['G'] == Decimal('180.00')

    def test_edit_does_not_add_sizes(self, editor, cama_luxo):
        editor.save_product({'name': 'Cama Luxo Premium'}, product=cama_luxo)

        cama_luxo.refresh_from_db()
        assert cama_luxo.name == 'Cama Luxo Premium'
        assert cama_luxo.sizes.count() == 4
        assert cama_luxo.product_code == 'CAM-0001'

    def test_unknown_size_rolls_back_whole_edit(self, editor, cama_luxo):
        with pytest.raises(UnknownSizeError):
            editor.save_product(
                {'name': 'Outro nome', 'prices': [{'size': 'M', 'price': '150'}, {'size': 'XG', 'price': '150'}]},
                product=cama_luxo,
            )

        cama_luxo.refresh_from_db()
        assert cama_luxo.name == 'Cama Luxo'
        assert prices_by_size(cama_luxo)['M'] == Decimal('100.00')

    def test_stale_token_is_rejected(self, editor, cama_luxo):
        cama_luxo.refresh_from_db()
        stale = cama_luxo.updated_at - timedelta(seconds=5)

        with pytest.raises(StaleWriteError):
            editor.save_product({'name': 'Outro nome'}, product=cama_luxo, expected_updated_at=stale)

        assert Product.objects.get(pk=cama_luxo.pk).name == 'Cama Luxo'

    @pytest.mark.parametrize('change', [
        lambda editor, product: editor.set_prices(product, [{'size': 'G', 'price': '180.00'}]),
        lambda editor, product: editor.add_size(product, {'name': 'XG'}),
        lambda editor, product: editor.update_size(product.sizes.get(name='P'), {'dimensions': '55x45cm'}),
        lambda editor, product: editor.delete_size(product.sizes.get(name='GG')),
    ])
    def test_child_changes_move_the_token(self, editor, cama_luxo, change):
        product = Product.objects.get(pk=cama_luxo.pk)
        token = product.updated_at

        change(editor, Product.objects.get(pk=cama_luxo.pk))

        with pytest.raises(StaleWriteError):
            editor.save_product({'name': 'Outro nome'}, product=product, expected_updated_at=token)

    def test_attached_images_move_the_token(self, editor, cama_luxo, image_file):
        product = Product.objects.get(pk=cama_luxo.pk)
        token = product.updated_at

        editor.attach_images(Product.objects.get(pk=cama_luxo.pk), {None: [image_file]})

        with pytest.raises(StaleWriteError):
            editor.save_product({'name': 'Outro nome'}, product=product, expected_updated_at=token)

    def test_current_token_is_accepted(self, editor, cama_luxo):
        cama_luxo.refresh_from_db()

        editor.save_product(
            {'name': 'Outro nome'}, product=cama_luxo, expected_updated_at=cama_luxo.updated_at
        )

        assert Product.objects.get(pk=cama_luxo.pk).name == 'Outro nome'


@pytest.mark.django_db
class TestImages:

    def test_images_are_stored_per_color(self, editor, camas, azul, image_factory, media_root):
        product = editor.save_product(
            {'name': 'Cama Luxo', 'category': camas.pk},
            images={None: [image_factory('capa.png')], azul.pk: [image_factory('azul1.png'), image_factory('azul2.png')]},
        )

        images = list(product.images.order_by('color_id', 'display_order'))
        assert len(images) == 3
        tagged = [image for image in images if image.color_id == azul.pk]
        assert [image.display_order for image in tagged] == [0, 1]
        assert tagged[0].alt_text == 'Cama Luxo - Azul Marinho'
        assert f'products/{product.pk}/{azul.pk}/' in tagged[0].image.name
        assert all(image.image_url for image in images)
        assert len(stored_files(media_root)) == 3

    def test_failed_save_removes_stored_files(self, editor, camas, image_factory, media_root, app_logs):
        with pytest.raises(ColorNotFoundError):
            editor.save_product(
                {'name': 'Cama Luxo', 'category': camas.pk},
                images={None: [image_factory('capa.png')], 999: [image_factory('perdida.png')]},
            )

        assert not Product.objects.exists()
        assert not ProductImage.objects.exists()
        assert stored_files(media_root) == []
        assert any('Removed stored image' in record.getMessage() for record in app_logs.records)

    def test_attach_images_appends_after_existing(self, editor, cama_luxo, azul, image_factory):
        editor.attach_images(cama_luxo, {azul.pk: [image_factory('a.png')]})
        created = editor.attach_images(cama_luxo, {azul.pk: [image_factory('b.png')]})

        assert created[0].display_order == 1

    def test_deleting_image_removes_file(self, editor, cama_luxo, image_factory, media_root):
        image, = editor.attach_images(cama_luxo, {None: [image_factory()]})

        image.delete()

        assert stored_files(media_root) == []


@pytest.mark.django_db
class TestSizesAndDelete:

    def test_add_size_defaults_display_order(self, editor, cama_luxo):
        size = editor.add_size(cama_luxo, {'name': 'XG', 'dimensions': '90x80x25cm'})

        assert size.display_order == 5

    def test_add_size_keeps_explicit_zero_order(self, editor, cama_luxo):
        size = editor.add_size(cama_luxo, {'name': 'PP', 'display_order': 0})

        assert size.display_order == 0

    def test_add_size_requires_name(self, editor, cama_luxo):
        with pytest.raises(MissingFieldError):
            editor.add_size(cama_luxo, {'name': ''})

    def test_add_duplicate_size(self, editor, cama_luxo):
        with pytest.raises(DuplicateResourceError):
            editor.add_size(cama_luxo, {'name': 'M'})

    def test_update_size(self, editor, cama_luxo):
        size = cama_luxo.sizes.get(name='P')

        editor.update_size(size, {'dimensions': '55x45x17cm'})

        assert ProductSize.objects.get(pk=size.pk).dimensions == '55x45x17cm'

    def test_delete_size_removes_its_price(self, editor, cama_luxo):
        size = cama_luxo.sizes.get(name='GG')

        editor.delete_size(size)

        assert 'GG' not in prices_by_size(cama_luxo)

    def test_size_used_by_variant_is_kept(self, editor, cama_luxo):
        size = cama_luxo.sizes.get(name='M')
        VariantService().create_variant(cama_luxo, size)

        with pytest.raises(ResourceInUseError):
            editor.delete_size(size)

        assert ProductSize.objects.filter(pk=size.pk).exists()

    def test_delete_product_cascades(self, editor, cama_luxo, azul, image_factory):
        editor.attach_images(cama_luxo, {azul.pk: [image_factory()]})
        VariantService().create_variant(cama_luxo, cama_luxo.sizes.get(name='M'), azul)

        editor.delete_product(cama_luxo)

        assert not Product.objects.exists()
        assert not ProductSize.objects.exists()
        assert not ProductPrice.objects.exists()
        assert not ProductImage.objects.exists()
