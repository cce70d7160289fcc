import io
import logging

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image
from rest_framework.test import APIClient

from apps.accounts.models import AdminProfile
from apps.catalog.models import Category, Color
from apps.catalog.services import ProductEditorService


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = str(tmp_path / 'media')
    return tmp_path / 'media'


@pytest.fixture
def app_logs(caplog, monkeypatch):
    """caplog for the ``apps`` loggers, which do not propagate by default."""
    monkeypatch.setattr(logging.getLogger('apps'), 'propagate', True)
    caplog.set_level(logging.INFO, logger='apps')
    return caplog


# =============================================================================
# Users
# =============================================================================

def make_user(username, role=None, **extra):
    user = get_user_model().objects.create_user(
        username=username, email=f'{username}@peluciapet.com', password='senha-forte-123', **extra
    )
    if role is not None:
        AdminProfile.objects.create(user=user, full_name=username.title(), role=role)
    return user


@pytest.fixture
def staff_admin(db):
    return make_user('admin', role=AdminProfile.ROLE_ADMIN)


@pytest.fixture
def super_admin(db):
    return make_user('superadmin', role=AdminProfile.ROLE_SUPER_ADMIN)


@pytest.fixture
def customer(db):
    return make_user('cliente', role=AdminProfile.ROLE_USER)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_api(api_client, staff_admin):
    api_client.force_authenticate(user=staff_admin)
    return api_client


# =============================================================================
# Catalog data
# =============================================================================

@pytest.fixture
def camas(db):
    return Category.objects.create(name='Camas', icon='🛏️')


@pytest.fixture
def azul(db):
    return Color.objects.create(name='Azul Marinho', hex_code='#1F3A5F')


@pytest.fixture
def bege(db):
    return Color.objects.create(name='Bege', hex_code='#D8C3A5')


@pytest.fixture
def editor():
    return ProductEditorService()


@pytest.fixture
def cama_luxo(editor, camas):
    """'Cama Luxo' with the default sizes P/M/G/GG at the default price."""
    return editor.save_product({'name': 'Cama Luxo', 'category': camas.pk})


def make_image(name='foto.png', color=(200, 120, 80), content_type='image/png'):
    buffer = io.BytesIO()
    Image.new('RGB', (64, 64), color).save(buffer, format='PNG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type=content_type)


@pytest.fixture
def image_file():
    return make_image()


@pytest.fixture
def image_factory():
    return make_image
