from django.contrib import admin
from django.utils.html import format_html

from .models import Transaction, TransactionType


@admin.register(Transaction)
class TransactionAdmin(admin.ModelAdmin):
    """
    Admin interface for ledger entries.

    Entries are append-only: they can be browsed and searched but not
    added, edited or deleted here.
    """

    list_display = [
        'user',
        'position',
        'type_badge',
        'cosmetic_name',
        'cosmetic_id',
        'amount',
        'date',
    ]
    list_filter = ['type', 'date']
    search_fields = ['user__email', 'cosmetic_id', 'cosmetic_name']
    ordering = ['-date']
    date_hierarchy = 'date'
    list_select_related = ['user']

    readonly_fields = [
        'user',
        'position',
        'type',
        'cosmetic_id',
        'cosmetic_name',
        'cosmetic_image',
        'amount',
        'related_items',
        'date',
    ]

    def type_badge(self, obj):
        """Display transaction type as colored badge."""
        if obj.type == TransactionType.PURCHASE:
            bg, fg = '#A47449', 'white'
        else:
            bg, fg = '#6B8E5E', 'white'
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_type_display()
        )
    type_badge.short_description = 'Type'
    type_badge.admin_order_field = 'type'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
