"""
Mappers para conversão entre Entities (Core) e Models (Django).

Responsabilidades:
- Converter PersonEntity → PersonModel (para persistência)
- Converter PersonModel → PersonEntity (para uso no Core)

Princípios:
- Mappers são stateless
- Não contêm lógica de negócio
- Tratam apenas conversão de dados
"""

from typing import Iterable, List

from src.core.persons.entities import PersonEntity, PersonRole

from .models import PersonModel


class PersonMapper:
    """
    Mapper para conversão entre PersonEntity e PersonModel.

    Responsável por:
    - to_model(): Entity → Model
    - to_entity(): Model → Entity (com terapeuta resolvido)
    - to_entity_list(): List[Model] → List[Entity]
    - update_model(): copia dados cadastrais para Model existente
    """

    @staticmethod
    def to_model(entity: PersonEntity) -> PersonModel:
        """
        Converte PersonEntity para PersonModel.

        Note:
            Não chama .save() - deixa isso para o Repository
        """
        return PersonModel(
            id=entity.id,
            cpf=entity.cpf,
            email=entity.email,
            nome=entity.nome,
            papel=entity.papel.value,
            senha=entity.senha,
            ativo=entity.ativo,
            terapeuta_id=entity.terapeuta_id,
            criado_em=entity.criado_em,
        )

    @staticmethod
    def to_entity(model: PersonModel, resolve_terapeuta: bool = True) -> PersonEntity:
        """
        Converte PersonModel para PersonEntity.

        Args:
            model: Model Django carregado do banco
            resolve_terapeuta: Se deve converter também o terapeuta
                (um nível apenas; o terapeuta não traz o próprio terapeuta)

        Note:
            Bypassa o factory method .criar() pois dados já
            foram validados no cadastro.
        """
        terapeuta = None
        if resolve_terapeuta and model.terapeuta_id:
            terapeuta = PersonMapper.to_entity(model.terapeuta, resolve_terapeuta=False)

        return PersonEntity(
            id=model.id,
            cpf=model.cpf,
            email=model.email,
            nome=model.nome,
            papel=PersonRole(model.papel),
            senha=model.senha,
            ativo=model.ativo,
            terapeuta_id=model.terapeuta_id,
            terapeuta=terapeuta,
            criado_em=model.criado_em,
            atualizado_em=model.atualizado_em,
        )

    @staticmethod
    def to_entity_list(models: Iterable[PersonModel]) -> List[PersonEntity]:
        return [PersonMapper.to_entity(model) for model in models]

    @staticmethod
    def update_model(model: PersonModel, entity: PersonEntity) -> PersonModel:
        """
        Atualiza Model existente com dados cadastrais da Entity.

        Senha e criado_em não são tocados.

        Returns:
            Model atualizado (não salvo)
        """
        model.cpf = entity.cpf
        model.email = entity.email
        model.nome = entity.nome
        model.papel = entity.papel.value
        model.ativo = entity.ativo
        model.terapeuta_id = entity.terapeuta_id

        return model
