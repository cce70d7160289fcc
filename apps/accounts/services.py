"""
Authorization queries and administrator provisioning.

Callers pass the acting user explicitly; nothing here reads request or
thread-local state.
"""

import logging

from django.contrib.auth import get_user_model
from django.db import DatabaseError, IntegrityError, transaction

from config.exceptions import (
    DuplicateResourceError,
    MissingFieldError,
    StoreError,
    SuperAdminRequiredError,
    ValidationError,
)

from .models import AdminProfile

logger = logging.getLogger(__name__)


def _profile(user):
    if user is None or not user.is_authenticated:
        return None
    try:
        return user.admin_profile
    except AdminProfile.DoesNotExist:
        return None


def is_admin(user) -> bool:
    """Admins, super admins and Django superusers."""
    if user is None or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    profile = _profile(user)
    return profile is not None and profile.is_admin


def is_super_admin(user) -> bool:
    if user is None or not user.is_authenticated:
        return False
    if user.is_superuser:
        return True
    profile = _profile(user)
    return profile is not None and profile.is_super_admin


def create_admin_user(caller, email, password, full_name='', role=AdminProfile.ROLE_ADMIN):
    """
    Create a login plus its AdminProfile.

    Only super admins may call this. User and profile are written in one
    transaction, so a failed profile insert leaves no orphan user behind.
    """
    if not is_super_admin(caller):
        logger.warning("User %s tried to create an admin user without permission", caller)
        raise SuperAdminRequiredError()

    email = (email or '').strip().lower()
    if not email or not password:
        raise MissingFieldError('E-mail e senha são obrigatórios.')
    if role not in dict(AdminProfile.ROLE_CHOICES):
        raise ValidationError('Papel inválido.')

    User = get_user_model()
    if User.objects.filter(username=email).exists():
        raise DuplicateResourceError('Já existe um usuário com este e-mail.')

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                username=email,
                email=email,
                password=password,
                is_staff=role in AdminProfile.ADMIN_ROLES,
            )
            profile = AdminProfile.objects.create(user=user, full_name=full_name, role=role)
    except IntegrityError as exc:
        logger.info("Admin user %s rejected as duplicate", email)
        raise DuplicateResourceError('Já existe um usuário com este e-mail.') from exc
    except DatabaseError as exc:
        logger.exception("Failed to create admin user %s", email)
        raise StoreError('Não foi possível criar o usuário.') from exc

    logger.info("Created %s user %s (by %s)", role, email, caller.get_username())
    return profile
