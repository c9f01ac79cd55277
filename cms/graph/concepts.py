"""Local wrappers over concept responses from the graph database client.

Each wrapper copies what it needs out of the RPC response object when it is
built and never talks to the server again. The response objects are read
by attribute only, so anything shaped like them (including the client's own
message classes) can be wrapped.
"""

import enum
from datetime import datetime, timezone
from typing import Any, Optional


class GraphError(Exception):
    """A concept response that cannot be represented locally."""


class BaseType(enum.Enum):
    META_TYPE = "META_TYPE"
    ENTITY_TYPE = "ENTITY_TYPE"
    RELATION_TYPE = "RELATION_TYPE"
    ATTRIBUTE_TYPE = "ATTRIBUTE_TYPE"
    ROLE = "ROLE"
    RULE = "RULE"
    ENTITY = "ENTITY"
    RELATION = "RELATION"
    ATTRIBUTE = "ATTRIBUTE"

    @classmethod
    def coerce(cls, value: Any) -> "BaseType":
        return _coerce_enum(cls, value)


class ValueType(enum.Enum):
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"
    INTEGER = "INTEGER"
    LONG = "LONG"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DATE = "DATE"

    @classmethod
    def coerce(cls, value: Any) -> "ValueType":
        return _coerce_enum(cls, value)


def _coerce_enum(enum_cls, value: Any):
    """Accept the enum itself, its name, or the client's zero-based ordinal."""
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls[value.upper()]
        except KeyError:
            raise GraphError(f"Unknown {enum_cls.__name__}: {value!r}") from None
    if isinstance(value, int) and not isinstance(value, bool):
        members = list(enum_cls)
        if 0 <= value < len(members):
            return members[value]
    raise GraphError(f"Unknown {enum_cls.__name__}: {value!r}")


SCHEMA_BASE_TYPES = frozenset({
    BaseType.META_TYPE,
    BaseType.ENTITY_TYPE,
    BaseType.RELATION_TYPE,
    BaseType.ATTRIBUTE_TYPE,
    BaseType.ROLE,
    BaseType.RULE,
})

TYPE_BASE_TYPES = frozenset({
    BaseType.META_TYPE,
    BaseType.ENTITY_TYPE,
    BaseType.RELATION_TYPE,
    BaseType.ATTRIBUTE_TYPE,
})

THING_BASE_TYPES = frozenset({
    BaseType.ENTITY,
    BaseType.RELATION,
    BaseType.ATTRIBUTE,
})


class Concept:

    def __init__(self, grpc_concept):
        self.id: str = grpc_concept.id
        self.base_type: BaseType = BaseType.coerce(grpc_concept.base_type)

    def is_schema_concept(self) -> bool:
        return self.base_type in SCHEMA_BASE_TYPES

    def is_type(self) -> bool:
        return self.base_type in TYPE_BASE_TYPES

    def is_thing(self) -> bool:
        return self.base_type in THING_BASE_TYPES

    def is_attribute_type(self) -> bool:
        return self.base_type == BaseType.ATTRIBUTE_TYPE

    def is_entity_type(self) -> bool:
        return self.base_type == BaseType.ENTITY_TYPE

    def is_relation_type(self) -> bool:
        return self.base_type == BaseType.RELATION_TYPE

    def is_role(self) -> bool:
        return self.base_type == BaseType.ROLE

    def is_rule(self) -> bool:
        return self.base_type == BaseType.RULE

    def is_attribute(self) -> bool:
        return self.base_type == BaseType.ATTRIBUTE

    def is_entity(self) -> bool:
        return self.base_type == BaseType.ENTITY

    def is_relation(self) -> bool:
        return self.base_type == BaseType.RELATION

    def __eq__(self, other):
        if not isinstance(other, Concept):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id!r}, base_type={self.base_type.name})"


class SchemaConcept(Concept):

    def __init__(self, grpc_concept):
        super(SchemaConcept, self).__init__(grpc_concept)
        self._label: str = grpc_concept.label_res.label

    def label(self) -> str:
        return self._label

    def __repr__(self):
        return f"{type(self).__name__}(id={self.id!r}, label={self._label!r})"


class Type(SchemaConcept):
    pass


class MetaType(Type):
    pass


class EntityType(Type):
    pass


class RelationType(Type):
    pass


class AttributeType(Type):

    def __init__(self, grpc_concept):
        super(AttributeType, self).__init__(grpc_concept)
        self._value_type = ValueType.coerce(grpc_concept.value_type_res.value_type)

    def value_type(self) -> ValueType:
        return self._value_type


class Role(SchemaConcept):
    pass


class Rule(SchemaConcept):

    def __init__(self, grpc_concept):
        super(Rule, self).__init__(grpc_concept)
        # Meta rules carry no patterns
        when_res = getattr(grpc_concept, 'when_res', None)
        then_res = getattr(grpc_concept, 'then_res', None)
        self._when: Optional[str] = getattr(when_res, 'pattern', None) or None
        self._then: Optional[str] = getattr(then_res, 'pattern', None) or None

    def when(self) -> Optional[str]:
        return self._when

    def then(self) -> Optional[str]:
        return self._then


class Thing(Concept):

    def __init__(self, grpc_concept):
        super(Thing, self).__init__(grpc_concept)
        self._inferred: bool = bool(grpc_concept.inferred_res.inferred)
        from .factory import ConceptFactory
        self._type = ConceptFactory.create_local_concept(grpc_concept.type_res.type)

    def is_inferred(self) -> bool:
        return self._inferred

    def type(self) -> Type:
        return self._type


class Entity(Thing):
    pass


class Relation(Thing):
    pass


class Attribute(Thing):

    def __init__(self, grpc_concept):
        super(Attribute, self).__init__(grpc_concept)
        if isinstance(self._type, AttributeType):
            self._value_type = self._type.value_type()
        else:
            self._value_type = ValueType.coerce(grpc_concept.value_type_res.value_type)
        self._value = decode_value(grpc_concept.value_res.value, self._value_type)

    def value(self) -> Any:
        return self._value

    def value_type(self) -> ValueType:
        return self._value_type


def decode_value(raw: Any, value_type: ValueType) -> Any:
    """Convert a raw attribute value to the Python type for ``value_type``.

    Dates travel as milliseconds since the epoch (UTC).
    """
    try:
        if value_type == ValueType.STRING:
            return str(raw)
        if value_type == ValueType.BOOLEAN:
            return _decode_bool(raw)
        if value_type in (ValueType.INTEGER, ValueType.LONG):
            return int(raw)
        if value_type in (ValueType.FLOAT, ValueType.DOUBLE):
            return float(raw)
        if value_type == ValueType.DATE:
            if isinstance(raw, datetime):
                return raw
            return datetime.fromtimestamp(int(raw) / 1000.0, tz=timezone.utc)
    except (TypeError, ValueError) as e:
        raise GraphError(f"Cannot read {raw!r} as {value_type.name}: {e}") from e
    raise GraphError(f"Unsupported value type: {value_type!r}")


def _decode_bool(raw: Any) -> bool:
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in ('true', '1'):
            return True
        if text in ('false', '0'):
            return False
        raise ValueError(f"not a boolean: {raw!r}")
    return bool(raw)
