from rest_framework import serializers

from apps.accounts.models import AdminProfile


class AdminProfileSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(source='user.email', read_only=True)

    class Meta:
        model = AdminProfile
        fields = ['id', 'user', 'email', 'full_name', 'role', 'created_at', 'updated_at']
        read_only_fields = ['user']


class AdminUserCreateSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6)
    full_name = serializers.CharField(required=False, allow_blank=True, default='')
    role = serializers.ChoiceField(
        choices=AdminProfile.ROLE_CHOICES, default=AdminProfile.ROLE_ADMIN
    )
