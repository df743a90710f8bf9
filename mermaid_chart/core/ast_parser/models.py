"""AST analysis data models.

Defines the structural model recovered from source text: entities,
their members, and the relationships between them.
These are pure data containers with no parsing logic.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# Placeholder name for declarations whose name field is missing
UNKNOWN_NAME = "Unknown"

# Type text used when no annotation is present
UNTYPED = "any"

# Return type used when a method has no return annotation
DEFAULT_RETURN_TYPE = "void"

# Type text given to every enum member
ENUM_MEMBER_TYPE = "string | number"


class EntityKind(Enum):
    """Top-level declaration kinds."""
    CLASS = "class"
    INTERFACE = "interface"
    FUNCTION = "function"
    VARIABLE = "variable"
    ENUM = "enum"


class Visibility(Enum):
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"


class RelationshipType(Enum):
    INHERITANCE = "inheritance"
    COMPOSITION = "composition"
    AGGREGATION = "aggregation"
    ASSOCIATION = "association"
    DEPENDENCY = "dependency"


@dataclass(frozen=True)
class Position:
    """1-based line/column of a declaration's first character."""
    line: int
    column: int

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "column": self.column}


@dataclass
class Parameter:
    name: str
    type: str = UNTYPED
    optional: bool = False
    default_value: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type, "optional": self.optional}
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        return data


@dataclass
class Property:
    """A field of a class/interface, or a member of an enum."""
    name: str
    type: str = UNTYPED
    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    is_readonly: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "visibility": self.visibility.value,
            "isStatic": self.is_static,
            "isReadonly": self.is_readonly,
        }


@dataclass
class Method:
    name: str
    parameters: List[Parameter] = field(default_factory=list)
    return_type: str = DEFAULT_RETURN_TYPE
    visibility: Visibility = Visibility.PUBLIC
    is_static: bool = False
    is_abstract: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "parameters": [p.to_dict() for p in self.parameters],
            "returnType": self.return_type,
            "visibility": self.visibility.value,
            "isStatic": self.is_static,
            "isAbstract": self.is_abstract,
        }


@dataclass
class Entity:
    """One extracted structural declaration plus its members.

    Functions carry a single synthetic Method mirroring their own
    signature; enums carry one Property per member.
    """

    kind: EntityKind
    name: str
    position: Position
    properties: List[Property] = field(default_factory=list)
    methods: List[Method] = field(default_factory=list)
    modifiers: List[str] = field(default_factory=list)
    extends: List[str] = field(default_factory=list)
    implements: List[str] = field(default_factory=list)

    @property
    def is_abstract(self) -> bool:
        return "abstract" in self.modifiers

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "name": self.name,
            "properties": [p.to_dict() for p in self.properties],
            "methods": [m.to_dict() for m in self.methods],
            "position": self.position.to_dict(),
            "modifiers": list(self.modifiers),
            "extends": list(self.extends),
            "implements": list(self.implements),
        }


@dataclass(frozen=True)
class Relationship:
    """Directed, typed edge between two entity names.

    Endpoints are plain names and may refer to types that were never
    extracted (external or unanalyzed declarations).
    """

    type: RelationshipType
    source: str
    target: str
    label: Optional[str] = None
    multiplicity: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type.value, "from": self.source, "to": self.target}
        if self.label is not None:
            data["label"] = self.label
        if self.multiplicity is not None:
            data["multiplicity"] = self.multiplicity
        return data


@dataclass
class AnalysisOptions:
    include_private: bool = True
    include_comments: bool = False  # accepted for API parity, not used by extraction
    max_depth: int = 5

    def __post_init__(self):
        if not 1 <= self.max_depth <= 10:
            raise ValueError(f"max_depth must be between 1 and 10, got {self.max_depth}")


@dataclass
class AnalysisResult:
    """Complete analysis output for a single source document."""

    entities: List[Entity]
    relationships: List[Relationship]
    imports: List[str] = field(default_factory=list)
    exports: List[str] = field(default_factory=list)
    language: str = "typescript"
    total_lines: int = 0
    analysis_time: float = 0.0  # milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entities": [e.to_dict() for e in self.entities],
            "relationships": [r.to_dict() for r in self.relationships],
            "imports": list(self.imports),
            "exports": list(self.exports),
            "metadata": {
                "language": self.language,
                "totalLines": self.total_lines,
                "analysisTime": self.analysis_time,
            },
        }
