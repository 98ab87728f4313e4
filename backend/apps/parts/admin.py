"""
Admin configuration for parts models.
"""
from django.contrib import admin

from .forms import PartForm
from .models import MeasurementUnit, Part
from .services import SIFormatter


class PartInline(admin.TabularInline):
    model = Part
    extra = 0
    fields = ('name', 'min_amount', 'needs_review')
    show_change_link = True


@admin.register(MeasurementUnit)
class MeasurementUnitAdmin(admin.ModelAdmin):
    list_display = ('name', 'unit', 'is_integer', 'use_si_prefix')
    list_filter = ('is_integer', 'use_si_prefix')
    search_fields = ('name', 'unit')
    readonly_fields = ('created_at', 'updated_at')
    inlines = [PartInline]


@admin.register(Part)
class PartAdmin(admin.ModelAdmin):
    form = PartForm
    list_display = ('name', 'part_unit', 'mass_display', 'needs_review')
    list_filter = ('needs_review', 'part_unit')
    search_fields = ('name', 'description', 'tags')
    autocomplete_fields = ['part_unit']
    readonly_fields = ('created_at', 'updated_at')
    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'description', 'part_unit', 'min_amount')
        }),
        ('Advanced', {
            'fields': ('needs_review', 'tags', 'mass'),
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['mark_reviewed']

    def mass_display(self, obj):
        if obj.mass is None:
            return '-'
        return SIFormatter.from_settings().format(obj.mass, 'g')
    mass_display.short_description = 'Mass'
    mass_display.admin_order_field = 'mass'

    def mark_reviewed(self, request, queryset):
        count = queryset.update(needs_review=False)
        self.message_user(request, f"{count} parts marked as reviewed.")
    mark_reviewed.short_description = "Clear the review flag of selected parts"
