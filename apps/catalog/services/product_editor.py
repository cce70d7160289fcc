"""
Admin editor for the product aggregate.

A save is one atomic operation:

1. create or update the Product (new products get a generated code);
2. on create, add the default sizes with one price each; on edit, upsert
   the submitted prices only;
3. store the attached images per color bucket and add ProductImage rows.

Everything that can be checked without the database (name, category,
status, prices, image type and size) is checked before any query runs.
If a later step fails the transaction is rolled back and the image files
already written to storage are deleted.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, List, Optional

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import RestrictedError
from django.utils import timezone
from PIL import Image

from apps.catalog.models import (
    Category,
    Color,
    Product,
    ProductImage,
    ProductPrice,
    ProductSize,
)
from config.exceptions import (
    CategoryNotFoundError,
    ColorNotFoundError,
    DuplicateResourceError,
    InvalidImageError,
    InvalidPriceError,
    InvalidStatusError,
    MissingFieldError,
    ResourceInUseError,
    StoreError,
    UnknownSizeError,
)

from .codes import CodeGenerationError, CodeGenerator
from .versioning import ensure_current

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ['name', 'description', 'observations', 'is_custom_order', 'status']


def _catalog_setting(key):
    return settings.CATALOG[key]


class ProductEditorService:
    """
    Orchestrates creation and edition of a product with its sizes, prices
    and images.

    Price entries are dicts with ``price`` and either ``product_size`` (id)
    or ``size`` (name). Images map a color id (or None for the "no color"
    bucket) to a list of uploaded files.
    """

    def __init__(self, code_generator: Optional[CodeGenerator] = None):
        self.code_generator = code_generator or CodeGenerator()

    # =========================================================================
    # Product aggregate
    # =========================================================================

    def save_product(
        self,
        data: dict,
        images: Optional[Dict[Optional[int], List]] = None,
        product: Optional[Product] = None,
        expected_updated_at=None,
    ) -> Product:
        creating = product is None
        values = self._merge_values(data, product)
        prices = self._validate(values, data.get('prices') or [], images or {}, creating)

        stored_files = []
        try:
            with transaction.atomic():
                category = self._resolve_category(values['category'])
                if creating:
                    product = self._create_product(values, category)
                    self.add_default_sizes(product, prices)
                else:
                    ensure_current(Product, product.pk, expected_updated_at)
                    self._update_product(product, values, category)
                    if prices:
                        self._apply_prices(product, prices)
                if images:
                    self._attach_images(product, images, stored_files)
        except DatabaseError as exc:
            self._discard_files(stored_files)
            logger.exception("Failed to save product %r", values['name'])
            raise StoreError('Não foi possível salvar o produto.') from exc
        except Exception:
            self._discard_files(stored_files)
            raise

        logger.info(
            "%s product %s (%s)",
            'Created' if creating else 'Updated', product.product_code, product.pk,
        )
        return product

    def attach_images(self, product: Product, images: Dict[Optional[int], List]) -> List[ProductImage]:
        """Add images to an existing product as one atomic step."""
        self._validate_images(images)
        stored_files = []
        try:
            with transaction.atomic():
                created = self._attach_images(product, images, stored_files)
                self._touch(product)
        except DatabaseError as exc:
            self._discard_files(stored_files)
            logger.exception("Failed to attach images to product %s", product.pk)
            raise StoreError('Não foi possível salvar as imagens.') from exc
        except Exception:
            self._discard_files(stored_files)
            raise
        return created

    def set_prices(self, product: Product, prices: Iterable[dict]) -> List[ProductPrice]:
        """Upsert the given size prices; other sizes keep their price."""
        entries = self._validate_prices(list(prices))
        try:
            with transaction.atomic():
                saved = self._apply_prices(product, entries)
                self._touch(product)
                return saved
        except DatabaseError as exc:
            logger.exception("Failed to save prices of product %s", product.pk)
            raise StoreError('Não foi possível salvar os preços.') from exc

    @staticmethod
    def delete_product(product: Product):
        """Delete the product with its sizes, prices, images and variants."""
        code = product.product_code
        try:
            with transaction.atomic():
                product.delete()
        except DatabaseError as exc:
            logger.exception("Failed to delete product %s", code)
            raise StoreError('Não foi possível excluir o produto.') from exc
        logger.info("Deleted product %s", code)

    # =========================================================================
    # Per-product sizes
    # =========================================================================

    @staticmethod
    def add_size(product: Product, data: dict) -> ProductSize:
        name = (data.get('name') or '').strip()
        if not name:
            raise MissingFieldError('Nome do tamanho é obrigatório.')

        display_order = data.get('display_order')
        if display_order is None:
            display_order = product.sizes.count() + 1
        try:
            with transaction.atomic():
                size = ProductSize.objects.create(
                    product=product,
                    name=name,
                    dimensions=(data.get('dimensions') or '').strip(),
                    width_cm=data.get('width_cm'),
                    height_cm=data.get('height_cm'),
                    depth_cm=data.get('depth_cm'),
                    display_order=display_order,
                )
                ProductEditorService._touch(product)
        except IntegrityError as exc:
            raise DuplicateResourceError(f'O produto já possui o tamanho {name}.') from exc
        logger.info("Added size %s to product %s", name, product.pk)
        return size

    @staticmethod
    def update_size(size: ProductSize, data: dict) -> ProductSize:
        if 'name' in data:
            name = (data.get('name') or '').strip()
            if not name:
                raise MissingFieldError('Nome do tamanho é obrigatório.')
            size.name = name
        for field in ['dimensions', 'width_cm', 'height_cm', 'depth_cm', 'display_order']:
            if field in data:
                setattr(size, field, data[field])
        try:
            with transaction.atomic():
                size.save()
                ProductEditorService._touch(size.product)
        except IntegrityError as exc:
            raise DuplicateResourceError(f'O produto já possui o tamanho {size.name}.') from exc
        return size

    @staticmethod
    def delete_size(size: ProductSize):
        """Prices of the size go with it; sizes used by variants are kept."""
        try:
            with transaction.atomic():
                size.delete()
                ProductEditorService._touch(size.product)
        except RestrictedError as exc:
            raise ResourceInUseError('O tamanho possui variantes e não pode ser excluído.') from exc
        logger.info("Deleted size %s of product %s", size.name, size.product_id)

    # =========================================================================
    # Validation (no database access)
    # =========================================================================

    @staticmethod
    def _merge_values(data, product):
        values = {}
        for field in PRODUCT_FIELDS:
            if field in data:
                values[field] = data[field]
            elif product is not None:
                values[field] = getattr(product, field)

        if 'category' in data:
            values['category'] = data['category']
        elif product is not None:
            values['category'] = product.category_id
        else:
            values['category'] = None

        values['name'] = (values.get('name') or '').strip()
        values['description'] = values.get('description') or ''
        values['observations'] = values.get('observations') or ''
        values['is_custom_order'] = bool(values.get('is_custom_order', False))
        values['status'] = values.get('status') or Product.STATUS_ACTIVE
        return values

    def _validate(self, values, prices, images, creating):
        if not values['name']:
            raise MissingFieldError('Nome do produto é obrigatório.')
        if not values['category']:
            raise MissingFieldError('Categoria é obrigatória.')
        if values['status'] not in dict(Product.STATUS_CHOICES):
            raise InvalidStatusError()

        entries = self._validate_prices(prices)
        if creating:
            default_names = {size['name'] for size in _catalog_setting('DEFAULT_SIZES')}
            for entry in entries:
                if entry.get('size') not in default_names:
                    raise UnknownSizeError(f"Tamanho desconhecido: {entry.get('size')}")

        self._validate_images(images)
        return entries

    @staticmethod
    def _validate_prices(prices):
        entries = []
        for entry in prices:
            if not entry.get('product_size') and not entry.get('size'):
                raise MissingFieldError('Cada preço precisa indicar o tamanho.')
            try:
                price = Decimal(str(entry.get('price')))
            except (InvalidOperation, ValueError):
                raise InvalidPriceError()
            if not price.is_finite() or price <= 0:
                raise InvalidPriceError()
            entries.append({**entry, 'price': price})
        return entries

    @staticmethod
    def _validate_images(images):
        max_size = _catalog_setting('MAX_IMAGE_SIZE')
        for files in images.values():
            for upload in files:
                content_type = getattr(upload, 'content_type', '') or ''
                if not content_type.startswith('image/') or upload.size > max_size:
                    raise InvalidImageError()
                try:
                    Image.open(upload).verify()
                except (OSError, SyntaxError) as exc:
                    raise InvalidImageError(f'Arquivo de imagem inválido: {upload.name}') from exc
                finally:
                    upload.seek(0)

    # =========================================================================
    # Write steps (inside the transaction)
    # =========================================================================

    @staticmethod
    def _resolve_category(category):
        if isinstance(category, Category):
            return category
        try:
            return Category.objects.get(pk=category)
        except (Category.DoesNotExist, ValueError, TypeError):
            raise CategoryNotFoundError()

    def _create_product(self, values, category):
        try:
            code = self.code_generator.generate_product_code(category)
        except CodeGenerationError as exc:
            logger.error("Product code generation failed for category %s: %s", category.pk, exc)
            raise StoreError('Não foi possível gerar o código do produto.') from exc

        return Product.objects.create(
            category=category,
            product_code=code,
            **{field: values[field] for field in PRODUCT_FIELDS},
        )

    @staticmethod
    def _update_product(product, values, category):
        for field in PRODUCT_FIELDS:
            setattr(product, field, values[field])
        product.category = category
        product.save()

    @staticmethod
    def add_default_sizes(product, prices=()):
        """
        Give the product the default sizes, each with a price.

        Sizes the product already has are kept, and so are their prices.
        """
        submitted = {entry['size']: entry['price'] for entry in prices}
        default_price = _catalog_setting('DEFAULT_PRICE')

        for order, spec in enumerate(_catalog_setting('DEFAULT_SIZES'), start=1):
            size, _ = ProductSize.objects.get_or_create(
                product=product,
                name=spec['name'],
                defaults={
                    'dimensions': spec.get('dimensions', ''),
                    'width_cm': spec.get('width_cm'),
                    'height_cm': spec.get('height_cm'),
                    'depth_cm': spec.get('depth_cm'),
                    'display_order': order,
                },
            )
            ProductPrice.objects.get_or_create(
                product=product,
                product_size=size,
                defaults={'price': submitted.get(spec['name'], default_price)},
            )

    @staticmethod
    def _touch(product):
        # Child rows changed: move the stale-write token of the parent
        now = timezone.now()
        Product.objects.filter(pk=product.pk).update(updated_at=now)
        product.updated_at = now

    @staticmethod
    def _apply_prices(product, prices):
        sizes = list(product.sizes.all())
        by_id = {size.pk: size for size in sizes}
        by_name = {size.name: size for size in sizes}

        saved = []
        for entry in prices:
            size_ref = entry.get('product_size')
            if size_ref:
                size = by_id.get(getattr(size_ref, 'pk', size_ref))
            else:
                size = by_name.get(entry.get('size'))
            if size is None:
                raise UnknownSizeError()

            price, _ = ProductPrice.objects.update_or_create(
                product=product,
                product_size=size,
                defaults={'price': entry['price']},
            )
            saved.append(price)
        return saved

    @staticmethod
    def _attach_images(product, images, stored_files):
        color_ids = [key for key in images if key is not None]
        colors = {color.pk: color for color in Color.objects.filter(pk__in=color_ids)}

        created = []
        for color_id, files in images.items():
            color = None
            if color_id is not None:
                color = colors.get(color_id)
                if color is None:
                    raise ColorNotFoundError()

            offset = product.images.filter(color=color).count()
            for index, upload in enumerate(files):
                image = ProductImage(
                    product=product,
                    color=color,
                    display_order=offset + index,
                    alt_text=f"{product.name} - {color.name}" if color else product.name,
                )
                try:
                    image.image.save(upload.name, upload, save=False)
                except OSError as exc:
                    raise InvalidImageError(f'Arquivo de imagem inválido: {upload.name}') from exc
                stored_files.append((image.image.storage, image.image.name))
                image.image_url = image.image.url
                image.save()
                created.append(image)
        return created

    @staticmethod
    def _discard_files(stored_files):
        for storage, name in stored_files:
            try:
                storage.delete(name)
            except OSError:
                logger.warning("Could not remove stored image %s", name, exc_info=True)
            else:
                logger.warning("Removed stored image %s after failed save", name)
