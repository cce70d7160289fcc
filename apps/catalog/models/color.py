import re

from django.core.validators import RegexValidator
from django.db import models

HEX_CODE_PATTERN = r'^#[0-9A-Fa-f]{6}$'
HEX_CODE_RE = re.compile(HEX_CODE_PATTERN)


class Color(models.Model):
    """
    Colors used to group product images and to tell variants apart.
    """
    hex_color_validator = RegexValidator(
        regex=HEX_CODE_PATTERN,
        message='Cor deve estar no formato hexadecimal (#RRGGBB)'
    )

    name = models.CharField(
        max_length=100,
        unique=True,
        verbose_name='Nome'
    )
    hex_code = models.CharField(
        max_length=7,
        validators=[hex_color_validator],
        verbose_name='Cor Hex',
        help_text='Para swatches de cor (#RRGGBB)'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['name']
        verbose_name = 'Cor'
        verbose_name_plural = 'Cores'

    def __str__(self):
        return self.name
