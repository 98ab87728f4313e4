"""
Models for the parts app.
"""
from django.core.validators import MinValueValidator
from django.db import models

from apps.core.models import TimeStampedModel


class MeasurementUnit(TimeStampedModel):
    """
    Unit in which the amount of a part is counted (pieces, meters, grams ...).
    """
    name = models.CharField(max_length=100, unique=True)
    unit = models.CharField(
        max_length=20,
        null=True,
        blank=True,
        help_text="Symbol shown next to values, e.g. 'm' or 'g'"
    )
    is_integer = models.BooleanField(
        default=False,
        help_text="Amounts in this unit are whole numbers"
    )
    use_si_prefix = models.BooleanField(
        default=False,
        verbose_name="Use SI prefix",
        help_text="Values may be entered with a prefix like k or m"
    )
    comment = models.TextField(blank=True, default='')

    class Meta:
        verbose_name = "Measurement Unit"
        verbose_name_plural = "Measurement Units"
        ordering = ['name']

    def __str__(self):
        if self.unit:
            return f"{self.name} ({self.unit})"
        return self.name


class AdvancedProperties(models.Model):
    """
    Advanced properties of a part, not related to a more specific group.
    """
    # e.g. because the entry is still work in progress
    needs_review = models.BooleanField(default=False)
    tags = models.TextField(
        blank=True,
        default='',
        help_text="Comma separated list of tags"
    )
    mass = models.FloatField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0.0)],
        help_text="Mass of a single part unit in grams, empty if unknown"
    )

    class Meta:
        abstract = True

    @property
    def tag_list(self):
        """Tags as a list, blanks dropped. The stored string is not touched."""
        return [tag.strip() for tag in self.tags.split(',') if tag.strip()]


class Part(TimeStampedModel, AdvancedProperties):
    """
    A part kept in stock.
    """
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    part_unit = models.ForeignKey(
        MeasurementUnit,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='parts',
        verbose_name="Measurement unit"
    )
    min_amount = models.FloatField(
        default=0.0,
        validators=[MinValueValidator(0.0)],
        help_text="Stock level below which the part should be reordered"
    )

    class Meta:
        verbose_name = "Part"
        verbose_name_plural = "Parts"
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['name'], name='parts_part_name_idx'),
            models.Index(fields=['needs_review'], name='parts_part_review_idx'),
        ]

    def __str__(self):
        return self.name
