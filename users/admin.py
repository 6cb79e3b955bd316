from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from .forms import AdminAccountCreationForm, AdminAccountChangeForm
from .models import AdminAccount, AdminSession


@admin.register(AdminAccount)
class AdminAccountAdmin(UserAdmin):
    add_form = AdminAccountCreationForm
    form = AdminAccountChangeForm
    list_display = ('email', 'name', 'role', 'is_active', 'last_login')
    list_filter = ('role', 'is_active', 'is_staff')
    search_fields = ('email', 'name')
    ordering = ('-created_at',)
    readonly_fields = ('last_login', 'created_at', 'updated_at')
    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Profile', {'fields': ('name', 'role', 'created_by')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Dates', {'fields': ('last_login', 'created_at', 'updated_at')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'name', 'role', 'password1', 'password2'),
        }),
    )


@admin.register(AdminSession)
class AdminSessionAdmin(admin.ModelAdmin):
    list_display = ('account', 'ip_address', 'login_at', 'last_activity', 'is_active')
    list_filter = ('is_active', 'login_at')
    search_fields = ('account__email', 'ip_address')
