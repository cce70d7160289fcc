from django.contrib import admin

from .models import ContactMessage


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ['nome', 'email', 'telefone', 'assunto', 'status', 'created_at']
    list_filter = ['status', 'created_at']
    list_editable = ['status']
    search_fields = ['nome', 'email', 'assunto', 'mensagem']
    readonly_fields = ['nome', 'telefone', 'email', 'assunto', 'mensagem', 'created_at']
