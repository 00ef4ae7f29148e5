from django.contrib import admin

from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    ordering = ['email']
    list_display = ['email', 'name', 'is_active', 'is_staff', 'date_joined']
    search_fields = ['email', 'name']
    readonly_fields = ['id', 'date_joined', 'last_login']
    exclude = ['password']
