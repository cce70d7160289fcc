"""
Contact form relay: store the message, notify the business and send the
sender a confirmation.
"""

import logging
from smtplib import SMTPException

from django.conf import settings
from django.core.mail import send_mail
from django.db import DatabaseError
from django.utils.html import escape, linebreaks

from config.exceptions import ExternalServiceError, InvalidStatusError, MissingFieldError

from .models import ContactMessage

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ['nome', 'telefone', 'email', 'assunto', 'mensagem']


def _business_email(data):
    message = linebreaks(escape(data['mensagem']))
    return (
        '<h1>Nova mensagem de contato</h1>'
        f"<p><strong>Nome:</strong> {escape(data['nome'])}</p>"
        f"<p><strong>Telefone:</strong> {escape(data['telefone'])}</p>"
        f"<p><strong>Email:</strong> {escape(data['email'])}</p>"
        f"<p><strong>Assunto:</strong> {escape(data['assunto'])}</p>"
        '<p><strong>Mensagem:</strong></p>'
        f'{message}'
        '<hr><p><em>Mensagem enviada através do formulário de contato do site.</em></p>'
    )


def _confirmation_email(data):
    message = linebreaks(escape(data['mensagem']))
    return (
        f"<h1>Obrigado pelo contato, {escape(data['nome'])}!</h1>"
        '<p>Recebemos sua mensagem e entraremos em contato em breve.</p>'
        f"<p><strong>Seu assunto:</strong> {escape(data['assunto'])}</p>"
        '<p><strong>Sua mensagem:</strong></p>'
        f'{message}'
        '<hr><p>Atenciosamente,<br>Equipe Pelúcia Pet</p>'
    )


def submit_contact_message(data):
    """
    Persist the message as pending and send both emails.

    A failed insert is logged and the emails still go out; a failed send
    raises ExternalServiceError. Returns the saved message, or None when
    the insert failed.
    """
    data = {field: (data.get(field) or '').strip() for field in REQUIRED_FIELDS}
    missing = [field for field in REQUIRED_FIELDS if not data[field]]
    if missing:
        raise MissingFieldError(f"Campos obrigatórios: {', '.join(missing)}")

    logger.info("Contact message from %s <%s>", data['nome'], data['email'])

    message = None
    try:
        message = ContactMessage.objects.create(status=ContactMessage.STATUS_PENDING, **data)
    except DatabaseError:
        logger.exception("Failed to save contact message from %s", data['email'])

    try:
        send_mail(
            subject=f"Nova mensagem de contato: {data['assunto']}",
            message=data['mensagem'],
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[settings.CONTACT_EMAIL],
            html_message=_business_email(data),
        )
        send_mail(
            subject='Recebemos sua mensagem - Pelúcia Pet',
            message='Recebemos sua mensagem e entraremos em contato em breve.',
            from_email=settings.DEFAULT_FROM_EMAIL,
            recipient_list=[data['email']],
            html_message=_confirmation_email(data),
        )
    except (SMTPException, OSError) as exc:
        logger.error("Failed to send contact email for %s: %s", data['email'], exc)
        raise ExternalServiceError('Não foi possível enviar sua mensagem. Tente novamente.') from exc

    return message


def update_status(message, status):
    if status not in dict(ContactMessage.STATUS_CHOICES):
        raise InvalidStatusError()
    message.status = status
    message.save(update_fields=['status', 'updated_at'])
    logger.info("Contact message %s marked as %s", message.pk, status)
    return message
