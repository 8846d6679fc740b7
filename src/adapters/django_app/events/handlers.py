"""
Event Handlers - Processadores de Eventos de Domínio.

Handlers são executados de forma assíncrona via Celery quando
Domain Events de pessoas são publicados:

- Notificação: e-mail de boas-vindas, aviso de troca de senha,
  instruções de recuperação de senha
- Vínculo: avisar o terapeuta quando recebe um novo paciente

Padrão:
    @shared_task(bind=True, ...)
    def handle_<evento>(self, event_data: dict) -> None:
        # Processar evento

Nenhum payload carrega senha ou hash de senha.
"""

from typing import Any, Dict
import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


# =============================================================================
# Event Handlers - Pessoas
# =============================================================================

@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    acks_late=True,
)
def handle_pessoa_cadastrada(self, event_data: Dict[str, Any]) -> None:
    """
    Handler para evento PessoaCadastradaEvent.

    Ações:
    - Enviar boas-vindas ao e-mail cadastrado
    - Avisar o terapeuta quando um paciente é vinculado

    Args:
        event_data: Dados do evento serializado
    """
    try:
        pessoa_id = event_data.get('aggregate_id')
        data = event_data.get('data', {})
        papel = data.get('papel', '')
        email = data.get('email')
        terapeuta_id = data.get('terapeuta_id')

        logger.info(f"[HANDLER] PessoaCadastrada: {pessoa_id} | Papel: {papel}")

        if email:
            notify_user.delay(
                email=email,
                subject="Bem-vindo(a) ao CIF",
                message=f"Seu cadastro como {papel} foi concluído.",
            )

        if terapeuta_id:
            notify_therapist.delay(terapeuta_id=terapeuta_id, paciente_id=pessoa_id)

    except Exception as e:
        logger.error(f"Erro no handler PessoaCadastrada: {e}", exc_info=True)
        raise


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    acks_late=True,
)
def handle_senha_alterada(self, event_data: Dict[str, Any]) -> None:
    """
    Handler para evento SenhaAlteradaEvent.

    Ações:
    - Avisar o titular de que a senha foi trocada
    """
    try:
        pessoa_id = event_data.get('aggregate_id')
        email = event_data.get('data', {}).get('email')

        logger.info(f"[HANDLER] SenhaAlterada: {pessoa_id}")

        if email:
            notify_user.delay(
                email=email,
                subject="Sua senha foi alterada",
                message="Se não foi você, procure a recepção da clínica.",
            )

    except Exception as e:
        logger.error(f"Erro no handler SenhaAlterada: {e}", exc_info=True)
        raise


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=60,
    acks_late=True,
)
def handle_recuperacao_senha_solicitada(self, event_data: Dict[str, Any]) -> None:
    """
    Handler para evento RecuperacaoSenhaSolicitadaEvent.

    Ações:
    - Enviar instruções de redefinição ao e-mail cadastrado

    A senha atual nunca é enviada.
    """
    try:
        pessoa_id = event_data.get('aggregate_id')
        email = event_data.get('data', {}).get('email')

        logger.info(f"[HANDLER] RecuperacaoSenhaSolicitada: {pessoa_id}")

        if email:
            notify_user.delay(
                email=email,
                subject="Recuperação de senha",
                message=(
                    "Recebemos um pedido de recuperação de senha. "
                    "Use a opção de redefinição para cadastrar uma nova senha."
                ),
            )

    except Exception as e:
        logger.error(f"Erro no handler RecuperacaoSenhaSolicitada: {e}", exc_info=True)
        raise


@shared_task(bind=True, ignore_result=True)
def handle_status_pessoa_alterado(self, event_data: Dict[str, Any]) -> None:
    """
    Handler para PessoaAtualizadaEvent, PessoaInativadaEvent e PessoaReativadaEvent.

    Apenas registra a mudança para auditoria.
    """
    logger.info(
        f"[HANDLER] {event_data.get('event_type')}: {event_data.get('aggregate_id')}"
    )


# =============================================================================
# Event Dispatcher (Router)
# =============================================================================

EVENT_HANDLERS = {
    'PessoaCadastradaEvent': handle_pessoa_cadastrada,
    'PessoaAtualizadaEvent': handle_status_pessoa_alterado,
    'SenhaAlteradaEvent': handle_senha_alterada,
    'RecuperacaoSenhaSolicitadaEvent': handle_recuperacao_senha_solicitada,
    'PessoaInativadaEvent': handle_status_pessoa_alterado,
    'PessoaReativadaEvent': handle_status_pessoa_alterado,
}


@shared_task(bind=True, max_retries=5, default_retry_delay=30)
def dispatch_domain_event(self, event_type: str, event_data: Dict[str, Any]) -> None:
    """
    Dispatcher central para Domain Events.

    Roteia eventos para os handlers apropriados.
    Este é o ponto de entrada para todos os eventos.

    Args:
        event_type: Tipo do evento (ex: 'PessoaCadastradaEvent')
        event_data: Dados do evento serializado
    """
    handler = EVENT_HANDLERS.get(event_type)

    if handler:
        logger.info(f"[DISPATCHER] Roteando {event_type} para handler")
        handler.delay(event_data)
    else:
        logger.warning(f"[DISPATCHER] Handler não encontrado para {event_type}")


# =============================================================================
# Notification Tasks
# =============================================================================

@shared_task(bind=True, max_retries=3, default_retry_delay=120)
def notify_user(self, email: str, subject: str, message: str) -> None:
    """
    Envia e-mail ao titular do cadastro.

    Args:
        email: Destinatário
        subject: Assunto
        message: Corpo em texto puro
    """
    logger.info(f"[NOTIFICATION] EMAIL para {email}: {subject}")

    try:
        send_mail(
            subject,
            message,
            settings.DEFAULT_FROM_EMAIL,
            [email],
            fail_silently=False,
        )
    except Exception as e:
        logger.error(f"Falha ao enviar e-mail: {e}")
        raise self.retry(exc=e)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def notify_therapist(self, terapeuta_id: str, paciente_id: str) -> None:
    """
    Avisa o terapeuta sobre novo paciente vinculado.

    Args:
        terapeuta_id: ID do terapeuta
        paciente_id: ID do paciente recém-cadastrado
    """
    from src.adapters.django_app.persons.models import PersonModel

    terapeuta = PersonModel.objects.filter(pk=terapeuta_id).only('email').first()
    if terapeuta is None:
        logger.warning(f"[NOTIFICATION] Terapeuta {terapeuta_id} não encontrado")
        return

    notify_user.delay(
        email=terapeuta.email,
        subject="Novo paciente vinculado",
        message=f"O paciente {paciente_id} foi vinculado a você.",
    )
