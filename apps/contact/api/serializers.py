from rest_framework import serializers

from apps.contact.models import ContactMessage


class ContactMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ContactMessage
        fields = [
            'id', 'nome', 'telefone', 'email', 'assunto', 'mensagem',
            'status', 'created_at', 'updated_at'
        ]
        read_only_fields = ['status']


class ContactSubmissionSerializer(serializers.Serializer):
    # Emptiness is checked by the relay
    nome = serializers.CharField(allow_blank=True, max_length=200)
    telefone = serializers.CharField(allow_blank=True, max_length=30)
    email = serializers.EmailField()
    assunto = serializers.CharField(allow_blank=True, max_length=200)
    mensagem = serializers.CharField(allow_blank=True)


class StatusUpdateSerializer(serializers.Serializer):
    status = serializers.CharField()
