from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.accounts.models import AdminProfile
from apps.accounts.permissions import IsSuperAdmin
from apps.accounts.services import create_admin_user, is_admin, is_super_admin
from .serializers import AdminProfileSerializer, AdminUserCreateSerializer


class AdminUserViewSet(mixins.ListModelMixin,
                       mixins.RetrieveModelMixin,
                       mixins.UpdateModelMixin,
                       mixins.CreateModelMixin,
                       viewsets.GenericViewSet):
    """
    Back-office users, managed by super admins.
    """
    queryset = AdminProfile.objects.select_related('user')
    serializer_class = AdminProfileSerializer
    permission_classes = [IsSuperAdmin]

    def create(self, request, *args, **kwargs):
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        profile = create_admin_user(request.user, **serializer.validated_data)
        return Response(AdminProfileSerializer(profile).data, status=status.HTTP_201_CREATED)


class MeView(APIView):
    """Current user and its admin flags."""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        user = request.user
        profile = getattr(user, 'admin_profile', None)
        return Response({
            'id': user.pk,
            'username': user.get_username(),
            'email': user.email,
            'full_name': profile.full_name if profile else user.get_full_name(),
            'role': profile.role if profile else None,
            'is_admin': is_admin(user),
            'is_super_admin': is_super_admin(user),
        })
