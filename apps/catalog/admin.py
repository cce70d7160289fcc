from django import forms
from django.contrib import admin
from django.utils.html import format_html
from import_export import resources, fields
from import_export.admin import ImportExportModelAdmin
from import_export.widgets import ForeignKeyWidget
from adminsortable2.admin import SortableAdminMixin, SortableAdminBase, SortableInlineAdminMixin
from simple_history.admin import SimpleHistoryAdmin

from .models import (
    Category,
    Color,
    Size,
    Product,
    ProductSize,
    ProductPrice,
    ProductImage,
    ProductVariant,
    PriceHistory,
)
from .services import CodeGenerator, ProductEditorService, VariantService
from config.exceptions import DuplicateVariantCodeError, UnknownSizeError


# =============================================================================
# Import/Export Resources
# =============================================================================

class VariantResource(resources.ModelResource):
    """Resource for importing/exporting variants."""

    product_code = fields.Field(
        column_name='product_code',
        attribute='product',
        widget=ForeignKeyWidget(Product, 'product_code')
    )
    color_name = fields.Field(
        column_name='color',
        attribute='color',
        widget=ForeignKeyWidget(Color, 'name')
    )
    size = fields.Field(
        column_name='size',
        attribute='product_size__name',
        readonly=True
    )

    class Meta:
        model = ProductVariant
        import_id_fields = ['variant_code']
        fields = (
            'variant_code', 'product_code', 'size', 'color_name',
            'stock_quantity', 'is_available'
        )
        export_order = fields


class ColorResource(resources.ModelResource):
    """Resource for importing/exporting colors."""

    class Meta:
        model = Color
        import_id_fields = ['name']
        fields = ('name', 'hex_code')


# =============================================================================
# Forms
# =============================================================================

class ProductVariantAdminForm(forms.ModelForm):
    """Rejects a product/size/color combination whose code is already taken."""

    class Meta:
        model = ProductVariant
        fields = '__all__'

    def clean(self):
        cleaned_data = super().clean()
        product = cleaned_data.get('product')
        product_size = cleaned_data.get('product_size')
        if product is None or product_size is None:
            return cleaned_data
        if product_size.product_id != product.pk:
            self.add_error('product_size', str(UnknownSizeError.default_detail))
            return cleaned_data

        code = VariantService().assign_code(product, product_size, cleaned_data.get('color'))
        taken = ProductVariant.objects.filter(variant_code=code).exclude(pk=self.instance.pk)
        if taken.exists():
            raise forms.ValidationError(f'{DuplicateVariantCodeError.default_detail} ({code})')
        return cleaned_data


# =============================================================================
# Inlines
# =============================================================================

class ProductSizeInline(SortableInlineAdminMixin, admin.TabularInline):
    model = ProductSize
    extra = 0
    fields = ['name', 'dimensions', 'width_cm', 'height_cm', 'depth_cm', 'display_order']


class ProductPriceInline(admin.TabularInline):
    model = ProductPrice
    extra = 0
    fields = ['product_size', 'price']

    def formfield_for_foreignkey(self, db_field, request, **kwargs):
        # Only the sizes of the product being edited
        if db_field.name == 'product_size':
            product_id = request.resolver_match.kwargs.get('object_id')
            kwargs['queryset'] = ProductSize.objects.filter(product_id=product_id)
        return super().formfield_for_foreignkey(db_field, request, **kwargs)


class ProductImageInline(SortableInlineAdminMixin, admin.TabularInline):
    model = ProductImage
    extra = 1
    fields = ['image', 'color', 'alt_text', 'is_available', 'stock_quantity', 'display_order', 'image_preview']
    readonly_fields = ['image_preview']

    def image_preview(self, obj):
        if obj.image:
            return format_html(
                '<img src="{}" style="max-height: 50px; max-width: 100px;" />',
                obj.thumbnail.url
            )
        if obj.image_url:
            return format_html(
                '<img src="{}" style="max-height: 50px; max-width: 100px;" />',
                obj.image_url
            )
        return '-'
    image_preview.short_description = 'Preview'


class VariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 0
    fields = ['variant_code', 'product_size', 'color', 'stock_quantity', 'is_available']
    readonly_fields = ['variant_code', 'product_size', 'color']
    show_change_link = True
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


# =============================================================================
# Model Admins
# =============================================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'icon', 'product_count', 'created_at']
    search_fields = ['name', 'description']

    def product_count(self, obj):
        return obj.products.count()
    product_count.short_description = 'Produtos'


@admin.register(Color)
class ColorAdmin(ImportExportModelAdmin):
    resource_class = ColorResource
    list_display = ['name', 'hex_code', 'color_swatch']
    search_fields = ['name', 'hex_code']

    def color_swatch(self, obj):
        return format_html(
            '<div style="width: 20px; height: 20px; background-color: {}; '
            'border: 1px solid #ccc; border-radius: 3px;"></div>',
            obj.hex_code
        )
    color_swatch.short_description = 'Cor'


@admin.register(Size)
class SizeAdmin(SortableAdminMixin, admin.ModelAdmin):
    list_display = ['name', 'dimensions', 'width_cm', 'height_cm', 'depth_cm', 'display_order']
    search_fields = ['name']


@admin.register(Product)
class ProductAdmin(SortableAdminBase, SimpleHistoryAdmin):
    list_display = [
        'product_code', 'name', 'category', 'status', 'is_custom_order',
        'price_range', 'variant_count', 'updated_at'
    ]
    list_filter = ['status', 'category', 'is_custom_order', 'created_at']
    search_fields = ['name', 'product_code', 'description']
    readonly_fields = ['product_code', 'price_range', 'variant_count', 'created_at', 'updated_at']
    inlines = [ProductSizeInline, ProductPriceInline, ProductImageInline, VariantInline]

    fieldsets = (
        (None, {
            'fields': ('name', 'product_code', 'category', 'description', 'status')
        }),
        ('Encomenda', {
            'fields': ('is_custom_order', 'observations')
        }),
        ('Informações', {
            'fields': ('price_range', 'variant_count', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['activate_products', 'deactivate_products']

    def save_model(self, request, obj, form, change):
        if not obj.product_code:
            obj.product_code = CodeGenerator().generate_product_code(obj.category)
        super().save_model(request, obj, form, change)

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        if not change:
            # Runs after the inlines so sizes entered on the add form are kept
            ProductEditorService.add_default_sizes(form.instance)

    @admin.action(description='Ativar produtos selecionados')
    def activate_products(self, request, queryset):
        count = queryset.update(status=Product.STATUS_ACTIVE)
        self.message_user(request, f'{count} produtos ativados.')

    @admin.action(description='Desativar produtos selecionados')
    def deactivate_products(self, request, queryset):
        count = queryset.update(status=Product.STATUS_INACTIVE)
        self.message_user(request, f'{count} produtos desativados.')


@admin.register(ProductVariant)
class ProductVariantAdmin(ImportExportModelAdmin, SimpleHistoryAdmin):
    resource_class = VariantResource
    form = ProductVariantAdminForm
    list_display = [
        'variant_code', 'product', 'product_size', 'color',
        'stock_quantity', 'stock_status', 'is_available'
    ]
    list_filter = ['product', 'color', 'is_available']
    list_editable = ['stock_quantity', 'is_available']
    search_fields = ['variant_code', 'product__name', 'product__product_code']
    autocomplete_fields = ['product', 'color']
    readonly_fields = ['variant_code', 'created_at', 'updated_at']
    list_per_page = 50

    fieldsets = (
        (None, {
            'fields': ('product', 'product_size', 'color', 'variant_code')
        }),
        ('Estoque', {
            'fields': ('stock_quantity', 'is_available')
        }),
        ('Informações', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['mark_available', 'mark_unavailable']

    def save_model(self, request, obj, form, change):
        obj.variant_code = VariantService().assign_code(obj.product, obj.product_size, obj.color)
        super().save_model(request, obj, form, change)

    def stock_status(self, obj):
        if not obj.is_available:
            return format_html('<span style="color: blue;">Indisponível</span>')
        if obj.stock_quantity <= 0:
            return format_html('<span style="color: red;">Sem estoque</span>')
        return format_html('<span style="color: green;">Em estoque</span>')
    stock_status.short_description = 'Status Estoque'

    @admin.action(description='Marcar como disponível')
    def mark_available(self, request, queryset):
        count = queryset.update(is_available=True)
        self.message_user(request, f'{count} variantes atualizadas.')

    @admin.action(description='Marcar como indisponível')
    def mark_unavailable(self, request, queryset):
        count = queryset.update(is_available=False)
        self.message_user(request, f'{count} variantes atualizadas.')


@admin.register(PriceHistory)
class PriceHistoryAdmin(admin.ModelAdmin):
    list_display = [
        'product_price', 'old_price', 'new_price',
        'price_diff_display', 'changed_at'
    ]
    list_filter = ['changed_at', 'product_price__product']
    search_fields = ['product_price__product__name', 'product_price__product__product_code']
    readonly_fields = [
        'product_price', 'old_price', 'new_price',
        'changed_at', 'price_difference', 'percentage_change'
    ]
    date_hierarchy = 'changed_at'

    def price_diff_display(self, obj):
        diff = obj.price_difference
        if diff is None:
            return '-'
        if diff > 0:
            return format_html('<span style="color: green;">+R$ {}</span>', f'{diff:.2f}')
        elif diff < 0:
            return format_html('<span style="color: red;">R$ {}</span>', f'{diff:.2f}')
        return 'R$ 0.00'
    price_diff_display.short_description = 'Diferença'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# =============================================================================
# Admin Site Configuration
# =============================================================================

admin.site.site_header = 'Pelúcia Pet Admin'
admin.site.site_title = 'Pelúcia Pet'
admin.site.index_title = 'Painel de Administração'
