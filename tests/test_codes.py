import pytest

from apps.catalog.models import Category, Product, ProductSize
from apps.catalog.services import CodeGenerationError, CodeGenerator


@pytest.fixture
def generator():
    return CodeGenerator()


@pytest.mark.django_db
class TestProductCodes:

    def test_first_code_of_category(self, generator, camas):
        assert generator.generate_product_code(camas) == 'CAM-0001'

    def test_sequence_continues_after_highest_code(self, generator, camas):
        Product.objects.create(name='A', category=camas, product_code='CAM-0001')
        Product.objects.create(name='B', category=camas, product_code='CAM-0007')

        assert generator.generate_product_code(camas) == 'CAM-0008'

    def test_accents_are_stripped_from_prefix(self, generator):
        category = Category.objects.create(name='Acessórios')

        assert generator.generate_product_code(category) == 'ACE-0001'

    def test_fallback_prefix_when_name_has_no_letters(self, generator):
        category = Category.objects.create(name='🐾')

        assert generator.generate_product_code(category) == 'PRD-0001'

    def test_missing_category_fails(self, generator):
        with pytest.raises(CodeGenerationError):
            generator.generate_product_code(None)


@pytest.mark.django_db
class TestVariantCodes:

    def test_code_from_product_size_and_color(self, generator, cama_luxo, azul):
        size = cama_luxo.sizes.get(name='M')

        code = generator.generate_variant_code(cama_luxo, size, azul)

        assert code == f'{cama_luxo.product_code}-M-AZUL-MARINHO'

    def test_code_without_color(self, generator, cama_luxo):
        size = cama_luxo.sizes.get(name='GG')

        assert generator.generate_variant_code(cama_luxo, size) == f'{cama_luxo.product_code}-GG'

    def test_same_inputs_give_same_code(self, generator, cama_luxo, azul):
        size = cama_luxo.sizes.get(name='P')

        first = generator.generate_variant_code(cama_luxo, size, azul)
        second = generator.generate_variant_code(cama_luxo, size, azul)

        assert first == second

    def test_product_without_code_fails(self, generator, camas):
        product = Product(name='Sem código', category=camas, product_code='')
        size = ProductSize(name='P')

        with pytest.raises(CodeGenerationError):
            generator.generate_variant_code(product, size)
