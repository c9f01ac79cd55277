import logging

from .concepts import (
    Attribute,
    AttributeType,
    BaseType,
    Concept,
    Entity,
    EntityType,
    GraphError,
    MetaType,
    Relation,
    RelationType,
    Role,
    Rule,
)


logger = logging.getLogger(__name__)


class ConceptFactory:
    """Builds the local wrapper matching a concept response's base type."""

    _local_concepts = {
        BaseType.META_TYPE: MetaType,
        BaseType.ENTITY_TYPE: EntityType,
        BaseType.RELATION_TYPE: RelationType,
        BaseType.ATTRIBUTE_TYPE: AttributeType,
        BaseType.ROLE: Role,
        BaseType.RULE: Rule,
        BaseType.ENTITY: Entity,
        BaseType.RELATION: Relation,
        BaseType.ATTRIBUTE: Attribute,
    }

    @classmethod
    def create_local_concept(cls, grpc_concept) -> Concept:
        if grpc_concept is None:
            raise GraphError("Missing concept in response")

        base_type = BaseType.coerce(grpc_concept.base_type)
        concept_class = cls._local_concepts.get(base_type)
        if concept_class is None:
            raise GraphError(f"No local concept for base type {base_type.name}")

        logger.debug(f"Wrapping concept {grpc_concept.id} as {concept_class.__name__}")
        return concept_class(grpc_concept)
