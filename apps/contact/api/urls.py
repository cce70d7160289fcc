from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import ContactMessageViewSet

router = SimpleRouter()
router.register(r'contact', ContactMessageViewSet, basename='contact')

urlpatterns = [
    path('', include(router.urls)),
]
