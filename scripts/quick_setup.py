#!/usr/bin/env python
"""
Setup rápido para desenvolvimento local.

Este script:
1. Configura Django settings
2. Cria banco de dados SQLite
3. Executa migrations
4. Cadastra terapeuta e pacientes de exemplo (opcional)

Uso:
    python scripts/quick_setup.py
    python scripts/quick_setup.py --with-sample-data
"""

import os
import sys
import argparse

# Raiz do projeto no path para imports `src.*`
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def setup_django():
    """Configura Django para uso standalone."""
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'src.config.settings')

    # URL não-PostgreSQL cai no SQLite local
    os.environ['DATABASE_URL'] = 'sqlite:///db.sqlite3'

    import django
    django.setup()


def run_migrations():
    """Executa migrations."""
    from django.core.management import call_command

    print("📦 Executando migrations...")
    call_command('migrate', verbosity=1)
    print("✅ Migrations concluídas!")


def create_sample_data():
    """Cadastra pessoas de exemplo pelos próprios Use Cases."""
    from src.config.container import get_container
    from src.core.persons.dtos import CadastrarPessoaInputDTO

    service = get_container().cadastrar_pessoa_service()

    print("📝 Cadastrando terapeuta de exemplo...")
    result = service.execute(CadastrarPessoaInputDTO(
        cpf='529.982.247-25',
        email='ana.terapeuta@cif.local',
        nome='Ana Souza',
        papel='TERAPEUTA',
        senha='cif2024',
    ))
    if result.is_failure:
        print(f"   ⚠️  {result.error.value}: {result.message}")
        return
    terapeuta = result.value
    print(f"   ✓ {terapeuta.nome} ({terapeuta.cpf_formatado})")

    sample_patients = [
        {'cpf': '111.444.777-35', 'email': 'joao@cif.local', 'nome': 'João Lima'},
        {'cpf': '123.456.789-09', 'email': 'maria@cif.local', 'nome': 'Maria Alves'},
    ]

    print("📝 Cadastrando pacientes de exemplo...")
    for patient_data in sample_patients:
        result = service.execute(CadastrarPessoaInputDTO(
            papel='PACIENTE',
            senha='cif2024',
            terapeuta_id=terapeuta.id,
            **patient_data,
        ))
        if result.is_ok:
            print(f"   ✓ {result.value.nome}")
        else:
            print(f"   ⚠️  {patient_data['nome']}: {result.message}")

    print("✅ Dados de exemplo criados!")


def check_connection():
    """Verifica conexão com o banco."""
    from django.db import connection

    print("🔍 Verificando conexão com o banco...")

    try:
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
        print("✅ Conexão OK!")
        return True
    except Exception as e:
        print(f"❌ Erro de conexão: {e}")
        return False


def show_info():
    """Mostra informações do setup."""
    from django.conf import settings

    print("\n" + "=" * 60)
    print("📊 Informações do Setup")
    print("=" * 60)
    print(f"  Database Engine: {settings.DATABASES['default']['ENGINE']}")
    print(f"  Database Name: {settings.DATABASES['default']['NAME']}")
    print(f"  Event Publisher: {settings.EVENT_PUBLISHER_MODE}")
    print(f"  Debug Mode: {settings.DEBUG}")
    print("=" * 60)
    print("\n🚀 Próximos passos:")
    print("   1. django-admin runserver --settings=src.config.settings")
    print("   2. Acesse: http://localhost:8000/admin/")
    print("   3. Acesse: http://localhost:8000/v1/person/listAllTherapist")
    print("\n")


def main():
    parser = argparse.ArgumentParser(description='Setup rápido para desenvolvimento')
    parser.add_argument(
        '--with-sample-data',
        action='store_true',
        help='Cadastrar pessoas de exemplo'
    )
    parser.add_argument(
        '--check-only',
        action='store_true',
        help='Apenas verificar conexão'
    )

    args = parser.parse_args()

    print("\n" + "=" * 60)
    print("🔧 CIF Person Service - Quick Setup")
    print("=" * 60 + "\n")

    setup_django()

    if args.check_only:
        check_connection()
        return

    if not check_connection():
        print("\n⚠️  Certifique-se de que o banco de dados está rodando.")
        return

    run_migrations()

    if args.with_sample_data:
        create_sample_data()

    show_info()


if __name__ == '__main__':
    main()
