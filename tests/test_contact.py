from smtplib import SMTPException

import pytest
from django.core import mail
from django.db import DatabaseError

from apps.contact.models import ContactMessage
from apps.contact.services import submit_contact_message, update_status
from config.exceptions import ExternalServiceError, InvalidStatusError, MissingFieldError

MESSAGE = {
    'nome': 'Maria',
    'telefone': '11 99999-0000',
    'email': 'maria@example.com',
    'assunto': 'Cama sob medida',
    'mensagem': 'Vocês fazem tamanho XG?\nObrigada!',
}


@pytest.mark.django_db
class TestSubmitContactMessage:

    def test_message_is_saved_and_emailed(self, settings):
        settings.CONTACT_EMAIL = 'contato@peluciapet.com'

        message = submit_contact_message(MESSAGE)

        assert message.status == ContactMessage.STATUS_PENDING
        assert len(mail.outbox) == 2
        business, confirmation = mail.outbox
        assert business.to == ['contato@peluciapet.com']
        assert business.subject == 'Nova mensagem de contato: Cama sob medida'
        assert confirmation.to == ['maria@example.com']
        html, _ = confirmation.alternatives[0]
        assert 'Obrigado pelo contato, Maria!' in html

    def test_missing_fields(self):
        with pytest.raises(MissingFieldError):
            submit_contact_message({**MESSAGE, 'mensagem': '  '})

        assert not ContactMessage.objects.exists()
        assert mail.outbox == []

    def test_email_still_sent_when_insert_fails(self, monkeypatch, app_logs):
        def broken_create(**kwargs):
            raise DatabaseError('banco fora do ar')

        monkeypatch.setattr(ContactMessage.objects, 'create', broken_create)

        assert submit_contact_message(MESSAGE) is None
        assert len(mail.outbox) == 2
        assert any(record.levelname == 'ERROR' for record in app_logs.records)

    def test_email_failure(self, monkeypatch):
        def broken_send(**kwargs):
            raise SMTPException('servidor recusou')

        monkeypatch.setattr('apps.contact.services.send_mail', broken_send)

        with pytest.raises(ExternalServiceError):
            submit_contact_message(MESSAGE)

    def test_html_is_escaped(self):
        submit_contact_message({**MESSAGE, 'nome': '<b>Maria</b>'})

        html, _ = mail.outbox[0].alternatives[0]
        assert '<b>Maria</b>' not in html
        assert '&lt;b&gt;Maria&lt;/b&gt;' in html


@pytest.mark.django_db
class TestStatus:

    def test_update_status(self):
        message = ContactMessage.objects.create(**MESSAGE)

        update_status(message, ContactMessage.STATUS_RESOLVED)

        assert ContactMessage.objects.get(pk=message.pk).status == 'resolved'

    def test_invalid_status(self):
        message = ContactMessage.objects.create(**MESSAGE)

        with pytest.raises(InvalidStatusError):
            update_status(message, 'archived')


@pytest.mark.django_db
class TestContactEndpoints:

    def test_public_submission(self, api_client):
        response = api_client.post('/api/contact/', MESSAGE, format='json')

        assert response.status_code == 201
        assert ContactMessage.objects.count() == 1

    def test_listing_requires_admin(self, api_client):
        response = api_client.get('/api/contact/')

        assert response.status_code in (401, 403)

    def test_admin_updates_status(self, admin_api):
        message = ContactMessage.objects.create(**MESSAGE)

        response = admin_api.post(f'/api/contact/{message.pk}/status/', {'status': 'in_progress'}, format='json')

        assert response.status_code == 200
        assert response.data['status'] == 'in_progress'
