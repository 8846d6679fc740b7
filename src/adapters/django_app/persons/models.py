"""
Django Models para o domínio de Pessoas.

Estes models são ADAPTERS - implementam a persistência para as
entidades de domínio definidas em src/core/persons/entities.py.

IMPORTANTE:
- Models NÃO contêm lógica de negócio
- Unicidade de CPF e e-mail é garantida por constraints nomeadas
- Models são mapeados para/de Entities via Mappers

Relacionamentos:
- PersonModel.terapeuta: auto-relacionamento paciente → terapeuta
  (PROTECT: terapeuta com pacientes não pode ser apagado fisicamente)
"""

from django.db import models
from django.utils import timezone


class PersonRoleChoices(models.TextChoices):
    """Choices para papel da pessoa (espelha PersonRole do Core)."""
    TERAPEUTA = 'Terapeuta', 'Terapeuta'
    PACIENTE = 'Paciente', 'Paciente'


class PersonModel(models.Model):
    """
    Model Django para persistência de Pessoas.

    Fields:
        id: UUID como primary key (gerado pelo repositório)
        cpf: CPF normalizado (11 dígitos)
        email: E-mail
        nome: Nome completo
        papel: Terapeuta ou Paciente
        senha: Hash da senha (formato dos hashers do Django)
        ativo: Flag de exclusão lógica
        terapeuta: Terapeuta responsável (somente pacientes)
        criado_em / atualizado_em: Timestamps
    """

    id = models.CharField(
        max_length=36,
        primary_key=True,
        editable=False,
        help_text="UUID único da pessoa"
    )

    cpf = models.CharField(
        max_length=11,
        help_text="CPF somente com dígitos"
    )

    email = models.EmailField(
        max_length=254,
        help_text="E-mail único"
    )

    nome = models.CharField(
        max_length=200,
        db_index=True,
        help_text="Nome completo"
    )

    papel = models.CharField(
        max_length=20,
        choices=PersonRoleChoices.choices,
        default=PersonRoleChoices.PACIENTE,
        db_index=True,
        help_text="Papel da pessoa na clínica"
    )

    senha = models.CharField(
        max_length=128,
        blank=True,
        default='',
        help_text="Hash da senha"
    )

    ativo = models.BooleanField(
        default=True,
        db_index=True,
        help_text="Desligado = exclusão lógica"
    )

    terapeuta = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='pacientes',
        help_text="Terapeuta responsável"
    )

    criado_em = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        help_text="Data/hora de criação"
    )

    atualizado_em = models.DateTimeField(
        auto_now=True,
        help_text="Data/hora da última atualização"
    )

    class Meta:
        db_table = 'persons'
        verbose_name = 'Pessoa'
        verbose_name_plural = 'Pessoas'
        ordering = ['nome']
        constraints = [
            models.UniqueConstraint(fields=['cpf'], name='uniq_person_cpf'),
            models.UniqueConstraint(fields=['email'], name='uniq_person_email'),
        ]
        indexes = [
            models.Index(fields=['papel', 'nome'], name='persons_papel_nome_idx'),
        ]

    def __str__(self):
        return f"{self.nome} ({self.papel})"

    def __repr__(self):
        return f"<PersonModel id={self.id[:8]} papel={self.papel}>"
