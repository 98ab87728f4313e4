from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import MeasurementUnitViewSet, PartViewSet

router = DefaultRouter()
router.register(r'parts', PartViewSet)
router.register(r'measurement-units', MeasurementUnitViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
