from .catalog import CatalogService
from .codes import CodeGenerationError, CodeGenerator
from .product_editor import ProductEditorService
from .variants import VariantService

__all__ = [
    'CatalogService',
    'CodeGenerationError',
    'CodeGenerator',
    'ProductEditorService',
    'VariantService',
]
