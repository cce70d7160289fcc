from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import AdminUserViewSet, MeView

router = SimpleRouter()
router.register(r'admin-users', AdminUserViewSet, basename='admin-user')

urlpatterns = [
    path('auth/me/', MeView.as_view(), name='auth-me'),
    path('', include(router.urls)),
]
