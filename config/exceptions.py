"""
Standard API exceptions.

Every API error response uses the same body:

    {
        "error": "error_code",
        "message": "Mensagem para o usuário"
    }

Usage:
    from config.exceptions import InvalidPriceError

    if price <= 0:
        raise InvalidPriceError()
"""

from django.db.models import ProtectedError, RestrictedError
from rest_framework import status
from rest_framework.exceptions import APIException


class BaseAPIException(APIException):
    """
    Base class for every custom API exception.
    Guarantees the {"error", "message"} response body.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'error'
    default_detail = 'Ocorreu um erro.'

    def __init__(self, detail=None, code=None):
        self.code = code or self.default_code
        self.message = detail or self.default_detail
        self.detail = {
            'error': self.code,
            'message': self.message,
        }

    def __str__(self):
        return str(self.message)


# =============================================================================
# Validation Errors (400 Bad Request)
# =============================================================================

class ValidationError(BaseAPIException):
    """Input rejected before touching the store."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_code = 'validation_error'
    default_detail = 'Os dados informados são inválidos.'


class MissingFieldError(ValidationError):
    default_code = 'missing_field'
    default_detail = 'Campo obrigatório não informado.'


class InvalidHexCodeError(ValidationError):
    default_code = 'invalid_hex_code'
    default_detail = 'O código hexadecimal deve estar no formato #RRGGBB.'


class InvalidPriceError(ValidationError):
    default_code = 'invalid_price'
    default_detail = 'Todos os preços devem ser maiores que zero.'


class InvalidImageError(ValidationError):
    default_code = 'invalid_image'
    default_detail = 'Apenas imagens até 5MB são permitidas.'


class InvalidStatusError(ValidationError):
    default_code = 'invalid_status'
    default_detail = 'Status inválido.'


class UnknownSizeError(ValidationError):
    default_code = 'unknown_size'
    default_detail = 'Tamanho não pertence a este produto.'


class InvalidQuantityError(ValidationError):
    default_code = 'invalid_quantity'
    default_detail = 'A quantidade em estoque não pode ser negativa.'


# =============================================================================
# Permission Errors (403 Forbidden)
# =============================================================================

class ForbiddenError(BaseAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_code = 'forbidden'
    default_detail = 'Acesso restrito a administradores.'


class SuperAdminRequiredError(ForbiddenError):
    default_code = 'super_admin_required'
    default_detail = 'Apenas super administradores podem criar usuários administradores.'


# =============================================================================
# Not Found Errors (404 Not Found)
# =============================================================================

class ResourceNotFoundError(BaseAPIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_code = 'not_found'
    default_detail = 'Registro não encontrado.'


class ProductNotFoundError(ResourceNotFoundError):
    default_code = 'product_not_found'
    default_detail = 'Produto não encontrado.'


class CategoryNotFoundError(ResourceNotFoundError):
    default_code = 'category_not_found'
    default_detail = 'Categoria não encontrada.'


class ColorNotFoundError(ResourceNotFoundError):
    default_code = 'color_not_found'
    default_detail = 'Cor não encontrada.'


# =============================================================================
# Conflict Errors (409 Conflict)
# =============================================================================

class ConflictError(BaseAPIException):
    status_code = status.HTTP_409_CONFLICT
    default_code = 'conflict'
    default_detail = 'Conflito ao salvar os dados.'


class DuplicateResourceError(ConflictError):
    default_code = 'duplicate_resource'
    default_detail = 'Já existe um registro com estes dados.'


class DuplicateVariantCodeError(ConflictError):
    default_code = 'duplicate_variant_code'
    default_detail = 'Já existe uma variante com este código.'


class ResourceInUseError(ConflictError):
    default_code = 'resource_in_use'
    default_detail = 'O registro está em uso e não pode ser excluído.'


class StaleWriteError(ConflictError):
    default_code = 'stale_write'
    default_detail = 'O registro foi alterado por outra pessoa. Recarregue e tente novamente.'


# =============================================================================
# Server Errors (500 Internal Server Error)
# =============================================================================

class InternalError(BaseAPIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_code = 'internal_error'
    default_detail = 'Erro interno. Tente novamente mais tarde.'


class StoreError(InternalError):
    """Any database failure surfaced to the caller."""
    default_code = 'store_error'
    default_detail = 'Não foi possível salvar os dados.'


class ExternalServiceError(InternalError):
    default_code = 'external_service_error'
    default_detail = 'Falha ao comunicar com um serviço externo.'


# =============================================================================
# Exception Handler
# =============================================================================

def custom_exception_handler(exc, context):
    """
    Converts DRF's own exceptions to the standard body.

    ProtectedError and RestrictedError (delete blocked by a PROTECT or
    RESTRICT foreign key) become ResourceInUseError. Registered in REST_FRAMEWORK['EXCEPTION_HANDLER'].
    """
    from rest_framework.views import exception_handler

    if isinstance(exc, (ProtectedError, RestrictedError)):
        exc = ResourceInUseError()

    response = exception_handler(exc, context)

    if response is not None and not isinstance(exc, BaseAPIException):
        error_code = getattr(exc, 'default_code', 'error')
        detail = getattr(exc, 'detail', None)
        if isinstance(detail, dict):
            response.data = {
                'error': error_code,
                'message': 'Os dados informados são inválidos.',
                'fields': detail,
            }
        else:
            if isinstance(detail, list):
                message = str(detail[0]) if detail else str(exc)
            else:
                message = str(detail) if detail is not None else str(exc)
            response.data = {
                'error': error_code,
                'message': message,
            }

    return response
