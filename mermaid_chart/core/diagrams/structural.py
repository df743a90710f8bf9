"""Deterministic Mermaid generator for class diagrams.

Takes an AnalysisResult and produces Mermaid ``classDiagram`` syntax.
No state is kept between calls: one call produces one complete document.
"""

import logging
import re
import time
from typing import Dict, List

from ..ast_parser.models import (
    AnalysisResult,
    Entity,
    EntityKind,
    Method,
    Property,
    Relationship,
    RelationshipType,
    Visibility,
)
from ..exceptions import CLASS_DIAGRAM_GENERATION_ERROR, INVALID_DIAGRAM_TYPE, GenerationError
from .models import DiagramType, GenerationOptions, GenerationResult

logger = logging.getLogger(__name__)

_INDENT = "    "
_MEMBER_INDENT = _INDENT * 2

_VISIBILITY_SYMBOLS: Dict[Visibility, str] = {
    Visibility.PUBLIC: "+",
    Visibility.PRIVATE: "-",
    Visibility.PROTECTED: "#",
}

_STATIC_MARKER = "$ "
_READONLY_MARKER = "~ "
_ABSTRACT_MARKER = "* "

_EDGE_STYLES: Dict[RelationshipType, str] = {
    RelationshipType.INHERITANCE: "--|>",
    RelationshipType.COMPOSITION: "*--",
    RelationshipType.AGGREGATION: "o--",
    RelationshipType.ASSOCIATION: "-->",
    RelationshipType.DEPENDENCY: "..>",
}
_DEFAULT_EDGE_STYLE = "-->"

# Only classes and interfaces get a block in a class diagram
_BLOCK_KINDS = (EntityKind.CLASS, EntityKind.INTERFACE)

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9_]")


def sanitize_name(name: str) -> str:
    """Replace every character outside ``[A-Za-z0-9_]`` with an underscore.

    Used for block labels and relationship endpoints alike, so a name
    always encodes to the same identifier.
    """
    return _UNSAFE_CHARS.sub("_", name)


class ClassDiagramGenerator:
    """Encodes entities and relationships as a Mermaid class diagram."""

    diagram_type = DiagramType.CLASS_DIAGRAM

    def generate(self, analysis: AnalysisResult, options: GenerationOptions) -> GenerationResult:
        """Produce a complete class diagram document.

        Args:
            analysis: Entities and relationships to encode
            options: Generation options; ``diagram_type`` must be classDiagram

        Returns:
            GenerationResult with the Mermaid text and counts

        Raises:
            GenerationError: INVALID_DIAGRAM_TYPE for any other diagram kind,
                CLASS_DIAGRAM_GENERATION_ERROR if emission fails
        """
        requested = _diagram_type_value(options.diagram_type)
        if requested != self.diagram_type.value:
            raise GenerationError(
                f"Class diagram generator only supports {self.diagram_type.value}, got {requested!r}",
                INVALID_DIAGRAM_TYPE,
                {"requested_type": requested},
            )

        start = time.perf_counter()
        try:
            mermaid_code = build_class_diagram(analysis, options)
        except Exception as e:
            logger.error("Class diagram generation failed: %s", e)
            raise GenerationError(
                f"Class diagram generation failed: {e}",
                CLASS_DIAGRAM_GENERATION_ERROR,
                {"error": repr(e), "analysis": analysis.to_dict()},
            ) from e

        return GenerationResult(
            mermaid_code=mermaid_code,
            diagram_type=self.diagram_type,
            node_count=len(analysis.entities),
            edge_count=len(analysis.relationships),
            generation_time=(time.perf_counter() - start) * 1000,
        )


def build_class_diagram(analysis: AnalysisResult, options: GenerationOptions) -> str:
    lines = ["classDiagram"]

    if options.direction:
        lines.append(f"{_INDENT}direction {options.direction}")

    if options.include_title and options.title:
        lines.append(f"{_INDENT}title {options.title}")

    lines.append("")

    for entity in analysis.entities:
        if entity.kind in _BLOCK_KINDS:
            lines.extend(_render_entity(entity))
            lines.append("")

    for relationship in analysis.relationships:
        lines.append(_render_relationship(relationship))

    return "\n".join(lines)


def _render_entity(entity: Entity) -> List[str]:
    lines = [f"{_INDENT}class {sanitize_name(entity.name)} {{"]

    if entity.kind is EntityKind.INTERFACE:
        lines.append(f"{_MEMBER_INDENT}<<interface>>")
    elif entity.is_abstract:
        lines.append(f"{_MEMBER_INDENT}<<abstract>>")

    for prop in entity.properties:
        lines.append(f"{_MEMBER_INDENT}{_render_property(prop)}")

    for method in entity.methods:
        lines.append(f"{_MEMBER_INDENT}{_render_method(method)}")

    lines.append(f"{_INDENT}}}")
    return lines


def _visibility_symbol(visibility) -> str:
    return _VISIBILITY_SYMBOLS.get(visibility, "+")


def _render_property(prop: Property) -> str:
    static = _STATIC_MARKER if prop.is_static else ""
    readonly = _READONLY_MARKER if prop.is_readonly else ""
    return f"{_visibility_symbol(prop.visibility)}{static}{readonly}{prop.name} : {prop.type}"


def _render_method(method: Method) -> str:
    static = _STATIC_MARKER if method.is_static else ""
    abstract = _ABSTRACT_MARKER if method.is_abstract else ""
    params = ", ".join(f"{p.name}: {p.type}" for p in method.parameters)
    return (
        f"{_visibility_symbol(method.visibility)}{static}{abstract}"
        f"{method.name}({params}) : {method.return_type}"
    )


def _render_relationship(relationship: Relationship) -> str:
    arrow = _EDGE_STYLES.get(relationship.type, _DEFAULT_EDGE_STYLE)
    line = f"{_INDENT}{sanitize_name(relationship.source)} {arrow} {sanitize_name(relationship.target)}"

    if relationship.label:
        line += f" : {relationship.label}"

    if relationship.multiplicity:
        line += f' "{relationship.multiplicity}"'

    return line


def _diagram_type_value(diagram_type) -> str:
    if isinstance(diagram_type, DiagramType):
        return diagram_type.value
    return str(diagram_type)
