"""
Views for the parts app.
"""
import logging

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, filters
from rest_framework.decorators import action
from rest_framework.response import Response

from .models import MeasurementUnit, Part
from .serializers import MeasurementUnitSerializer, PartSerializer

logger = logging.getLogger(__name__)


class MeasurementUnitViewSet(viewsets.ModelViewSet):
    """
    API endpoint for measurement units
    """
    queryset = MeasurementUnit.objects.all()
    serializer_class = MeasurementUnitSerializer
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name', 'unit']
    ordering_fields = ['name', 'created_at']
    ordering = ['name']


class PartViewSet(viewsets.ModelViewSet):
    """
    API endpoint for parts
    """
    queryset = Part.objects.select_related('part_unit').all()
    serializer_class = PartSerializer
    filter_backends = [
        DjangoFilterBackend,
        filters.SearchFilter,
        filters.OrderingFilter
    ]
    filterset_fields = ['needs_review', 'part_unit']
    search_fields = ['name', 'description', 'tags']
    ordering_fields = ['name', 'mass', 'created_at', 'updated_at']
    ordering = ['-created_at']

    def perform_create(self, serializer):
        part = serializer.save()
        logger.info(f"Created part {part.id} ({part.name})")

    @action(detail=False, methods=['get'])
    def tags(self, request):
        """
        List every tag used by any part, sorted
        """
        tags = set()
        for value in Part.objects.exclude(tags='').values_list('tags', flat=True):
            tags.update(tag.strip() for tag in value.split(',') if tag.strip())
        return Response(sorted(tags))
