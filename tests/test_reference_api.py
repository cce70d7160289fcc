import pytest

from apps.catalog.models import Category, Color, Size
from apps.catalog.services import VariantService


@pytest.mark.django_db
class TestColors:

    def test_create_color(self, admin_api):
        response = admin_api.post('/api/colors/', {'name': 'Bege', 'hex_code': '#d8c3a5'}, format='json')

        assert response.status_code == 201
        assert response.data['hex_code'] == '#D8C3A5'

    @pytest.mark.parametrize('hex_code', ['D8C3A5', '#D8C3A', '#D8C3A5F', '#GGGGGG', 'bege'])
    def test_malformed_hex_is_rejected(self, admin_api, hex_code):
        response = admin_api.post('/api/colors/', {'name': 'Bege', 'hex_code': hex_code}, format='json')

        assert response.status_code == 400
        assert response.data['error'] == 'invalid_hex_code'
        assert not Color.objects.exists()

    def test_malformed_hex_on_update(self, admin_api, azul):
        response = admin_api.patch(f'/api/colors/{azul.pk}/', {'hex_code': '#12'}, format='json')

        assert response.status_code == 400
        azul.refresh_from_db()
        assert azul.hex_code == '#1F3A5F'

    def test_color_used_by_variant_cannot_be_deleted(self, admin_api, cama_luxo, azul):
        VariantService().create_variant(cama_luxo, cama_luxo.sizes.get(name='M'), azul)

        response = admin_api.delete(f'/api/colors/{azul.pk}/')

        assert response.status_code == 409
        assert response.data['error'] == 'resource_in_use'
        assert Color.objects.filter(pk=azul.pk).exists()

    def test_colors_sorted_by_name(self, admin_api, azul, bege):
        Color.objects.create(name='Amarelo', hex_code='#FFFF00')

        response = admin_api.get('/api/colors/')

        assert [color['name'] for color in response.data] == ['Amarelo', 'Azul Marinho', 'Bege']


@pytest.mark.django_db
class TestCategories:

    def test_create_requires_name(self, admin_api):
        response = admin_api.post('/api/categories/', {'description': 'sem nome'}, format='json')

        assert response.status_code == 400
        assert response.data['error'] == 'invalid'
        assert 'name' in response.data['fields']

    def test_update_category(self, admin_api, camas):
        response = admin_api.patch(f'/api/categories/{camas.pk}/', {'icon': '🐶'}, format='json')

        assert response.status_code == 200
        assert Category.objects.get(pk=camas.pk).icon == '🐶'

    def test_category_with_products_cannot_be_deleted(self, admin_api, cama_luxo):
        response = admin_api.delete(f'/api/categories/{cama_luxo.category_id}/')

        assert response.status_code == 409
        assert response.data['error'] == 'resource_in_use'

    def test_empty_category_is_deleted(self, admin_api, camas):
        response = admin_api.delete(f'/api/categories/{camas.pk}/')

        assert response.status_code == 204
        assert not Category.objects.exists()


@pytest.mark.django_db
class TestSizes:

    def test_sizes_sorted_by_display_order(self, admin_api):
        Size.objects.create(name='G', display_order=3)
        Size.objects.create(name='P', display_order=1)

        response = admin_api.get('/api/sizes/')

        assert [size['name'] for size in response.data] == ['P', 'G']


@pytest.mark.django_db
class TestPermissions:

    def test_anonymous_cannot_write(self, api_client):
        response = api_client.post('/api/colors/', {'name': 'Bege', 'hex_code': '#D8C3A5'}, format='json')

        assert response.status_code in (401, 403)
        assert not Color.objects.exists()

    def test_non_admin_profile_is_forbidden(self, api_client, customer):
        api_client.force_authenticate(user=customer)

        response = api_client.get('/api/categories/')

        assert response.status_code == 403
        assert response.data['error'] == 'permission_denied'

    def test_django_superuser_is_admin(self, api_client, admin_user):
        api_client.force_authenticate(user=admin_user)

        response = api_client.get('/api/categories/')

        assert response.status_code == 200
