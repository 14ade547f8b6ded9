from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .forms import UserCreationForm, UserChangeForm
from .models import User, Profile


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    extra = 0


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    form = UserChangeForm
    add_form = UserCreationForm
    ordering = ['-date_joined']
    list_display = ['id', 'email', 'get_name', 'get_hostel', 'is_staff', 'date_joined']
    list_filter = ['is_staff', 'is_active']
    search_fields = ['email', 'profile__name']
    inlines = [ProfileInline]

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions')}),
        ('Important dates', {'fields': ('last_login', 'date_joined')}),
    )
    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2'),
        }),
    )

    def get_name(self, obj):
        return getattr(getattr(obj, 'profile', None), 'name', '-')
    get_name.short_description = 'Name'

    def get_hostel(self, obj):
        return getattr(getattr(obj, 'profile', None), 'hostel', '-')
    get_hostel.short_description = 'Hostel'


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'user', 'hostel', 'room', 'gender', 'branch', 'created_at']
    list_filter = ['gender', 'branch', 'hostel']
    search_fields = ['name', 'user__email', 'hostel', 'room']
    readonly_fields = ['created_at']
