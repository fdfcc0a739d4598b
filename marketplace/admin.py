"""
Django admin configuration for the marketplace models.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import (
    Booking,
    HelpRequest,
    Notification,
    Profile,
    Review,
    Skill,
    User,
    UserSkill,
)


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    fields = ['display_name', 'bio', 'location', 'phone', 'avatar_url', 'is_available', 'rating', 'total_reviews']
    readonly_fields = ['rating', 'total_reviews']


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Custom admin interface for User model.

    Profile details are edited inline; rating fields stay read-only.
    """

    list_display = [
        'email',
        'username',
        'is_staff',
        'is_active',
        'created_at',
    ]

    list_filter = [
        'is_staff',
        'is_superuser',
        'is_active',
        'created_at',
    ]

    search_fields = [
        'email',
        'username',
        'profile__display_name',
    ]

    ordering = ['-created_at']

    fieldsets = (
        (None, {
            'fields': ('username', 'email', 'password')
        }),
        (_('Permissions'), {
            'fields': (
                'is_active',
                'is_staff',
                'is_superuser',
                'groups',
                'user_permissions',
            ),
            'classes': ('collapse',),
        }),
        (_('Important Dates'), {
            'fields': ('last_login', 'date_joined', 'created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('username', 'email', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'updated_at', 'last_login', 'date_joined']

    inlines = [ProfileInline]

    list_per_page = 25

    def get_inlines(self, request, obj):
        # The profile is created by a signal once the user exists
        if obj is None:
            return []
        return super().get_inlines(request, obj)


@admin.register(Skill)
class SkillAdmin(admin.ModelAdmin):
    list_display = ['name', 'category']
    list_filter = ['category']
    search_fields = ['name', 'category']


@admin.register(UserSkill)
class UserSkillAdmin(admin.ModelAdmin):
    list_display = ['user', 'skill', 'experience_level', 'hourly_rate', 'created_at']
    list_filter = ['experience_level', 'skill__category']
    search_fields = ['user__email', 'skill__name']
    list_select_related = ['user', 'skill']


@admin.register(HelpRequest)
class HelpRequestAdmin(admin.ModelAdmin):
    """Admin interface for HelpRequest model."""

    list_display = [
        'title',
        'requester',
        'skill_needed',
        'urgency',
        'status',
        'created_at',
    ]

    list_filter = [
        'status',
        'urgency',
        'created_at',
    ]

    search_fields = [
        'title',
        'description',
        'skill_needed',
        'requester__email',
    ]

    readonly_fields = ['created_at', 'updated_at']

    date_hierarchy = 'created_at'

    list_per_page = 25

    fieldsets = (
        (None, {
            'fields': ('requester', 'title', 'description', 'skill_needed', 'location')
        }),
        (_('Budget & Status'), {
            'fields': ('budget_min', 'budget_max', 'urgency', 'status')
        }),
        (_('Timestamps'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    """
    Admin interface for Booking model.

    Status edits go through Booking.clean(), which rejects transitions
    outside the lifecycle.
    """

    list_display = [
        'id',
        'request',
        'helper',
        'requester',
        'status',
        'agreed_price',
        'scheduled_date',
        'created_at',
    ]

    list_filter = ['status', 'created_at']

    search_fields = [
        'request__title',
        'helper__email',
        'requester__email',
    ]

    readonly_fields = ['requester', 'created_at', 'updated_at']

    list_select_related = ['request', 'helper', 'requester']

    list_per_page = 25


@admin.register(Review)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ['id', 'booking', 'reviewer', 'reviewee', 'rating', 'created_at']
    list_filter = ['rating', 'created_at']
    search_fields = ['reviewer__email', 'reviewee__email', 'comment']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'type', 'title', 'is_read', 'created_at']
    list_filter = ['type', 'is_read']
    search_fields = ['user__email', 'title']
