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
    SchemaConcept,
    Thing,
    Type,
    ValueType,
)
from .factory import ConceptFactory

__all__ = [
    "Attribute",
    "AttributeType",
    "BaseType",
    "Concept",
    "ConceptFactory",
    "Entity",
    "EntityType",
    "GraphError",
    "MetaType",
    "Relation",
    "RelationType",
    "Role",
    "Rule",
    "SchemaConcept",
    "Thing",
    "Type",
    "ValueType",
]
