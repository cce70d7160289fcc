from django.conf import settings
from django.db import models


class AdminProfile(models.Model):
    """
    Back-office role of a user.
    Only ``admin`` and ``super_admin`` may use the admin API; only
    ``super_admin`` may create other administrators.
    """
    ROLE_USER = 'user'
    ROLE_ADMIN = 'admin'
    ROLE_SUPER_ADMIN = 'super_admin'
    ROLE_CHOICES = [
        (ROLE_USER, 'Usuário'),
        (ROLE_ADMIN, 'Administrador'),
        (ROLE_SUPER_ADMIN, 'Super administrador'),
    ]
    ADMIN_ROLES = (ROLE_ADMIN, ROLE_SUPER_ADMIN)

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='admin_profile',
        verbose_name='Usuário'
    )
    full_name = models.CharField(
        max_length=255,
        blank=True,
        verbose_name='Nome completo'
    )
    role = models.CharField(
        max_length=20,
        choices=ROLE_CHOICES,
        default=ROLE_ADMIN,
        verbose_name='Papel'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Perfil de administrador'
        verbose_name_plural = 'Perfis de administradores'

    def __str__(self):
        return f"{self.full_name or self.user.get_username()} ({self.get_role_display()})"

    @property
    def is_admin(self):
        return self.role in self.ADMIN_ROLES

    @property
    def is_super_admin(self):
        return self.role == self.ROLE_SUPER_ADMIN
