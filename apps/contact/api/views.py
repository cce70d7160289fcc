from rest_framework import filters, mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend

from apps.accounts.permissions import IsAdmin
from apps.contact.models import ContactMessage
from apps.contact.services import submit_contact_message, update_status
from .serializers import (
    ContactMessageSerializer,
    ContactSubmissionSerializer,
    StatusUpdateSerializer,
)


class ContactMessageViewSet(mixins.ListModelMixin,
                            mixins.RetrieveModelMixin,
                            mixins.CreateModelMixin,
                            mixins.DestroyModelMixin,
                            viewsets.GenericViewSet):
    """
    Contact messages.

    create: public contact form
    list / retrieve / status / delete: admins only
    """
    queryset = ContactMessage.objects.all()
    serializer_class = ContactMessageSerializer
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status']
    search_fields = ['nome', 'email', 'assunto']
    ordering = ['-created_at']

    def get_permissions(self):
        if self.action == 'create':
            return [AllowAny()]
        return [IsAdmin()]

    def create(self, request, *args, **kwargs):
        serializer = ContactSubmissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        submit_contact_message(serializer.validated_data)
        return Response({'success': True}, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_path='status')
    def set_status(self, request, pk=None):
        """Move a message to pending, in_progress or resolved."""
        message = self.get_object()
        serializer = StatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        update_status(message, serializer.validated_data['status'])
        return Response(ContactMessageSerializer(message).data)
