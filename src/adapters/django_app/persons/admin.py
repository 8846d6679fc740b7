"""
Django Admin para o domínio de Pessoas.

Permite à recepção consultar e corrigir cadastros.
O hash da senha nunca é exibido.
"""

from django.contrib import admin

from src.core.persons.cpf import format_cpf

from .models import PersonModel


@admin.register(PersonModel)
class PersonAdmin(admin.ModelAdmin):
    """Admin para PersonModel."""

    list_display = [
        'id_curto',
        'nome',
        'cpf_formatado',
        'email',
        'papel',
        'terapeuta',
        'ativo',
        'criado_em',
    ]

    list_filter = [
        'papel',
        'ativo',
        'criado_em',
    ]

    search_fields = [
        'id',
        'nome',
        'cpf',
        'email',
    ]

    readonly_fields = [
        'id',
        'criado_em',
        'atualizado_em',
    ]

    exclude = ['senha']

    raw_id_fields = ['terapeuta']

    ordering = ['nome']

    actions = ['inativar', 'reativar']

    def id_curto(self, obj):
        """Exibe ID curto (primeiros 8 caracteres)."""
        return obj.id[:8] + '...'
    id_curto.short_description = 'ID'

    def cpf_formatado(self, obj):
        return format_cpf(obj.cpf)
    cpf_formatado.short_description = 'CPF'

    @admin.action(description='Inativar pessoas selecionadas')
    def inativar(self, request, queryset):
        updated = queryset.update(ativo=False)
        self.message_user(request, f'{updated} pessoa(s) inativada(s).')

    @admin.action(description='Reativar pessoas selecionadas')
    def reativar(self, request, queryset):
        updated = queryset.update(ativo=True)
        self.message_user(request, f'{updated} pessoa(s) reativada(s).')
