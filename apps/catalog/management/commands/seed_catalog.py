"""
Create sample catalog data: categories, colors, the global size table,
a few products with their default sizes and prices, and variants.

Run with: python manage.py seed_catalog
"""
from decimal import Decimal

from django.conf import settings
from django.core.management.base import BaseCommand

from apps.catalog.models import Category, Color, Product, Size
from apps.catalog.services import ProductEditorService, VariantService

CATEGORIES = [
    ('Camas', '🛏️', 'Camas e caminhas para cães e gatos'),
    ('Almofadas', '🧸', 'Almofadas e travesseiros pet'),
    ('Tapetes', '🟫', 'Tapetes higiênicos e de descanso'),
]

COLORS = [
    ('Azul Marinho', '#1F3A5F'),
    ('Bege', '#D8C3A5'),
    ('Cinza', '#8E8D8A'),
    ('Rosa', '#E98074'),
]

PRODUCTS = [
    {
        'name': 'Cama Luxo',
        'category': 'Camas',
        'description': 'Cama de pelúcia com borda alta e base antiderrapante.',
        'prices': {'P': Decimal('119.90'), 'M': Decimal('149.90'), 'G': Decimal('179.90'), 'GG': Decimal('209.90')},
        'colors': ['Azul Marinho', 'Bege'],
    },
    {
        'name': 'Almofada Nuvem',
        'category': 'Almofadas',
        'description': 'Almofada macia de enchimento siliconado.',
        'prices': {},
        'colors': ['Cinza'],
    },
    {
        'name': 'Tapete Personalizado',
        'category': 'Tapetes',
        'description': 'Tapete bordado com o nome do pet.',
        'observations': 'Prazo de produção de 15 dias',
        'is_custom_order': True,
        'prices': {'G': Decimal('89.90')},
        'colors': ['Rosa'],
    },
]


class Command(BaseCommand):
    help = 'Creates sample catalog data'

    def handle(self, *args, **options):
        self.stdout.write("Creating categories...")
        categories = {}
        for name, icon, description in CATEGORIES:
            categories[name], _ = Category.objects.get_or_create(
                name=name,
                defaults={'icon': icon, 'description': description}
            )

        self.stdout.write("Creating colors...")
        colors = {}
        for name, hex_code in COLORS:
            colors[name], _ = Color.objects.get_or_create(name=name, defaults={'hex_code': hex_code})

        self.stdout.write("Creating sizes...")
        for order, spec in enumerate(settings.CATALOG['DEFAULT_SIZES'], start=1):
            Size.objects.get_or_create(
                name=spec['name'],
                defaults={
                    'dimensions': spec.get('dimensions', ''),
                    'width_cm': spec.get('width_cm'),
                    'height_cm': spec.get('height_cm'),
                    'depth_cm': spec.get('depth_cm'),
                    'display_order': order,
                }
            )

        self.stdout.write("Creating products...")
        editor = ProductEditorService()
        variants = VariantService()
        for spec in PRODUCTS:
            product = Product.objects.filter(name=spec['name']).first()
            if product is None:
                product = editor.save_product({
                    'name': spec['name'],
                    'category': categories[spec['category']].pk,
                    'description': spec['description'],
                    'observations': spec.get('observations', ''),
                    'is_custom_order': spec.get('is_custom_order', False),
                    'prices': [
                        {'size': size, 'price': price} for size, price in spec['prices'].items()
                    ],
                })

            for product_size in product.sizes.all():
                for color_name in spec['colors']:
                    color = colors[color_name]
                    if product.variants.filter(product_size=product_size, color=color).exists():
                        continue
                    variants.create_variant(
                        product=product,
                        product_size=product_size,
                        color=color,
                        stock_quantity=5,
                    )

        self.stdout.write(self.style.SUCCESS(
            f"Done! Products: {Product.objects.count()}, "
            f"categories: {Category.objects.count()}, colors: {Color.objects.count()}"
        ))
