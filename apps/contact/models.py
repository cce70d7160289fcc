from django.db import models


class ContactMessage(models.Model):
    """
    Message sent through the public contact form.
    """
    STATUS_PENDING = 'pending'
    STATUS_IN_PROGRESS = 'in_progress'
    STATUS_RESOLVED = 'resolved'
    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pendente'),
        (STATUS_IN_PROGRESS, 'Em andamento'),
        (STATUS_RESOLVED, 'Resolvido'),
    ]

    nome = models.CharField(max_length=200, verbose_name='Nome')
    telefone = models.CharField(max_length=30, verbose_name='Telefone')
    email = models.EmailField(verbose_name='E-mail')
    assunto = models.CharField(max_length=200, verbose_name='Assunto')
    mensagem = models.TextField(verbose_name='Mensagem')
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_PENDING,
        verbose_name='Status'
    )
    created_at = models.DateTimeField(auto_now_add=True, verbose_name='Recebida em')
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = 'Mensagem de contato'
        verbose_name_plural = 'Mensagens de contato'

    def __str__(self):
        return f"{self.nome} - {self.assunto}"
