from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html

from apps.ledger.models import Transaction
from .models import User


class TransactionInline(admin.TabularInline):
    """Read-only purchase/refund history within a user."""
    model = Transaction
    extra = 0
    fields = ['position', 'type', 'cosmetic_id', 'cosmetic_name', 'amount', 'related_items', 'date']
    readonly_fields = fields
    ordering = ['position']

    def has_add_permission(self, request, obj=None):
        """History is appended by the ledger services only."""
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for shop users.

    Balance, inventory and history are shown read-only; they change only
    through buy and refund so the history keeps explaining the balance.
    """

    list_display = [
        'email',
        'name',
        'balance',
        'inventory_size',
        'is_active_badge',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'is_superuser',
        'created_at',
    ]

    search_fields = [
        'email',
        'name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'name', 'password')
        }),
        ('Ledger', {
            'fields': ('balance', 'inventory'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'name', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'balance',
        'inventory',
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']
    inlines = [TransactionInline]

    def inventory_size(self, obj):
        """Number of owned cosmetics."""
        return len(obj.inventory or [])
    inventory_size.short_description = 'Items'

    def is_active_badge(self, obj):
        """Display active status as colored badge."""
        if obj.is_active:
            return format_html(
                '<span style="background: #6B8E5E; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">Active</span>'
            )
        return format_html(
            '<span style="background: #B85C5C; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Inactive</span>'
        )
    is_active_badge.short_description = 'Status'
    is_active_badge.admin_order_field = 'is_active'
