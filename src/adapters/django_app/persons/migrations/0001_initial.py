"""
Migration inicial para o domínio de Pessoas.

Cria a tabela:
- persons: Pacientes e terapeutas (auto-relacionamento)
"""

from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):
    """Migration inicial."""

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='PersonModel',
            fields=[
                ('id', models.CharField(
                    max_length=36,
                    primary_key=True,
                    serialize=False,
                    editable=False,
                    help_text='UUID único da pessoa'
                )),
                ('cpf', models.CharField(
                    max_length=11,
                    help_text='CPF somente com dígitos'
                )),
                ('email', models.EmailField(
                    max_length=254,
                    help_text='E-mail único'
                )),
                ('nome', models.CharField(
                    max_length=200,
                    db_index=True,
                    help_text='Nome completo'
                )),
                ('papel', models.CharField(
                    max_length=20,
                    choices=[
                        ('Terapeuta', 'Terapeuta'),
                        ('Paciente', 'Paciente'),
                    ],
                    default='Paciente',
                    db_index=True,
                    help_text='Papel da pessoa na clínica'
                )),
                ('senha', models.CharField(
                    max_length=128,
                    blank=True,
                    default='',
                    help_text='Hash da senha'
                )),
                ('ativo', models.BooleanField(
                    default=True,
                    db_index=True,
                    help_text='Desligado = exclusão lógica'
                )),
                ('criado_em', models.DateTimeField(
                    default=django.utils.timezone.now,
                    db_index=True,
                    help_text='Data/hora de criação'
                )),
                ('atualizado_em', models.DateTimeField(
                    auto_now=True,
                    help_text='Data/hora da última atualização'
                )),
                ('terapeuta', models.ForeignKey(
                    null=True,
                    blank=True,
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name='pacientes',
                    to='persons.personmodel',
                    help_text='Terapeuta responsável'
                )),
            ],
            options={
                'verbose_name': 'Pessoa',
                'verbose_name_plural': 'Pessoas',
                'db_table': 'persons',
                'ordering': ['nome'],
            },
        ),
        migrations.AddConstraint(
            model_name='personmodel',
            constraint=models.UniqueConstraint(fields=('cpf',), name='uniq_person_cpf'),
        ),
        migrations.AddConstraint(
            model_name='personmodel',
            constraint=models.UniqueConstraint(fields=('email',), name='uniq_person_email'),
        ),
        migrations.AddIndex(
            model_name='personmodel',
            index=models.Index(fields=['papel', 'nome'], name='persons_papel_nome_idx'),
        ),
    ]
