from django.contrib import admin

from .models import AdminProfile


@admin.register(AdminProfile)
class AdminProfileAdmin(admin.ModelAdmin):
    list_display = ['user', 'full_name', 'role', 'created_at']
    list_filter = ['role']
    search_fields = ['user__username', 'user__email', 'full_name']
    raw_id_fields = ['user']
