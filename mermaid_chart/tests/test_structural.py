"""Tests for the Mermaid class diagram generator."""

import re

import pytest

from mermaid_chart.core.ast_parser import (
    AnalysisResult,
    Entity,
    EntityKind,
    Method,
    Parameter,
    Position,
    Property,
    Relationship,
    RelationshipType,
    Visibility,
    analyze_source,
)
from mermaid_chart.core.diagrams import ClassDiagramGenerator, DiagramType, GenerationOptions, sanitize_name
from mermaid_chart.core.exceptions import (
    CLASS_DIAGRAM_GENERATION_ERROR,
    INVALID_DIAGRAM_TYPE,
    GenerationError,
)

SHAPES = '''
interface Named {
  name: string;
}

abstract class Shape implements Named {
  name: string;
  static count: number;
  protected readonly id: number;
  abstract area(): number;
}
'''

EXPECTED_SHAPES = """classDiagram
    direction LR

    class Named {
        <<interface>>
        +name : string
    }

    class Shape {
        <<abstract>>
        +name : string
        +$ count : number
        #~ id : number
        +* area() : number
    }

    Shape ..> Named : implements"""

DOGS = '''
class Animal {}
class Dog extends Animal {}
'''


def _result(entities=(), relationships=()) -> AnalysisResult:
    return AnalysisResult(entities=list(entities), relationships=list(relationships))


def _class(name, **kwargs) -> Entity:
    return Entity(kind=EntityKind.CLASS, name=name, position=Position(1, 1), **kwargs)


# =========================================================================
# Tests: Document structure
# =========================================================================

class TestDocument:
    def test_end_to_end_exact_text(self):
        analysis = analyze_source(SHAPES)
        result = ClassDiagramGenerator().generate(analysis, GenerationOptions(direction="LR"))
        assert result.mermaid_code == EXPECTED_SHAPES
        assert result.diagram_type is DiagramType.CLASS_DIAGRAM

    def test_inheritance_scenario(self):
        code = ClassDiagramGenerator().generate(analyze_source(DOGS), GenerationOptions()).mermaid_code
        assert code.startswith("classDiagram\n    direction TB\n")
        assert "    class Animal {" in code
        assert "    class Dog {" in code
        assert code.splitlines()[-1] == "    Dog --|> Animal"

    def test_title_only_when_requested(self):
        gen = ClassDiagramGenerator()
        with_title = gen.generate(_result(), GenerationOptions(include_title=True, title="Zoo")).mermaid_code
        without = gen.generate(_result(), GenerationOptions(include_title=False, title="Zoo")).mermaid_code
        missing = gen.generate(_result(), GenerationOptions(include_title=True)).mermaid_code
        assert "    title Zoo" in with_title.splitlines()
        assert "title" not in without
        assert "title" not in missing

    def test_no_direction(self):
        code = ClassDiagramGenerator().generate(_result(), GenerationOptions(direction=None)).mermaid_code
        assert code == "classDiagram\n"

    def test_functions_and_enums_not_rendered(self):
        entities = [
            Entity(kind=EntityKind.FUNCTION, name="helper", position=Position(1, 1), methods=[Method(name="helper")]),
            Entity(kind=EntityKind.ENUM, name="Color", position=Position(2, 1), properties=[Property(name="Red")]),
        ]
        result = ClassDiagramGenerator().generate(_result(entities), GenerationOptions())
        assert "helper" not in result.mermaid_code
        assert "Color" not in result.mermaid_code
        assert result.node_count == 2

    def test_idempotent(self):
        analysis = analyze_source(SHAPES)
        options = GenerationOptions(include_title=True, title="Shapes")
        first = ClassDiagramGenerator().generate(analysis, options).mermaid_code
        second = ClassDiagramGenerator().generate(analyze_source(SHAPES), options).mermaid_code
        assert first == second

    def test_counts(self):
        analysis = analyze_source(DOGS)
        result = ClassDiagramGenerator().generate(analysis, GenerationOptions())
        assert result.node_count == 2
        assert result.edge_count == 1
        assert result.to_dict()["metadata"]["generationTime"] >= 0


# =========================================================================
# Tests: Members
# =========================================================================

class TestMembers:
    def test_default_visibility_is_public(self):
        entity = _class("Box", properties=[Property(name="size", type="number")])
        code = ClassDiagramGenerator().generate(_result([entity]), GenerationOptions()).mermaid_code
        assert "        +size : number" in code.splitlines()

    def test_unrecognized_visibility_renders_public(self):
        entity = _class("Box", properties=[Property(name="size", type="number", visibility="internal")])
        code = ClassDiagramGenerator().generate(_result([entity]), GenerationOptions()).mermaid_code
        assert "        +size : number" in code.splitlines()

    def test_method_line(self):
        method = Method(
            name="move",
            parameters=[Parameter(name="dx", type="number"), Parameter(name="dy")],
            return_type="Point",
            visibility=Visibility.PRIVATE,
            is_static=True,
        )
        code = ClassDiagramGenerator().generate(_result([_class("Point", methods=[method])]), GenerationOptions()).mermaid_code
        assert "        -$ move(dx: number, dy: any) : Point" in code.splitlines()

    def test_properties_before_methods(self):
        entity = _class("Box", properties=[Property(name="size")], methods=[Method(name="open")])
        lines = ClassDiagramGenerator().generate(_result([entity]), GenerationOptions()).mermaid_code.splitlines()
        assert lines.index("        +size : any") < lines.index("        +open() : void")


# =========================================================================
# Tests: Relationships and sanitization
# =========================================================================

class TestRelationships:
    @pytest.mark.parametrize("rel_type,arrow", [
        (RelationshipType.INHERITANCE, "--|>"),
        (RelationshipType.COMPOSITION, "*--"),
        (RelationshipType.AGGREGATION, "o--"),
        (RelationshipType.ASSOCIATION, "-->"),
        (RelationshipType.DEPENDENCY, "..>"),
    ])
    def test_edge_styles(self, rel_type, arrow):
        rel = Relationship(type=rel_type, source="A", target="B")
        code = ClassDiagramGenerator().generate(_result(relationships=[rel]), GenerationOptions()).mermaid_code
        assert code.splitlines()[-1] == f"    A {arrow} B"

    def test_unknown_type_falls_back_to_association(self):
        rel = Relationship(type="realization", source="A", target="B")
        code = ClassDiagramGenerator().generate(_result(relationships=[rel]), GenerationOptions()).mermaid_code
        assert code.splitlines()[-1] == "    A --> B"

    def test_label_and_multiplicity(self):
        rel = Relationship(
            type=RelationshipType.AGGREGATION, source="Team", target="Player", label="has", multiplicity="1..*",
        )
        code = ClassDiagramGenerator().generate(_result(relationships=[rel]), GenerationOptions()).mermaid_code
        assert code.splitlines()[-1] == '    Team o-- Player : has "1..*"'

    def test_sanitize_name(self):
        assert sanitize_name("ns.Outer$Inner") == "ns_Outer_Inner"
        assert sanitize_name("Valid_Name9") == "Valid_Name9"
        assert sanitize_name("Café") == "Caf_"

    def test_labels_and_endpoints_match(self):
        source = "class Foo$ extends Base$1 {}\nclass Base$1 {}\n"
        code = ClassDiagramGenerator().generate(analyze_source(source), GenerationOptions()).mermaid_code

        labels = set(re.findall(r"^    class (\S+) \{$", code, re.MULTILINE))
        edges = re.findall(r"^    (\S+) --\|> (\S+)$", code, re.MULTILINE)
        assert labels == {"Foo_", "Base_1"}
        assert edges == [("Foo_", "Base_1")]
        for name in labels | {n for edge in edges for n in edge}:
            assert re.fullmatch(r"[A-Za-z0-9_]+", name)


# =========================================================================
# Tests: Failures
# =========================================================================

class TestFailures:
    @pytest.mark.parametrize("diagram_type", [DiagramType.FLOWCHART, "sequenceDiagram", "bogus"])
    def test_invalid_diagram_type(self, diagram_type):
        with pytest.raises(GenerationError) as exc_info:
            ClassDiagramGenerator().generate(_result(), GenerationOptions(diagram_type=diagram_type))
        assert exc_info.value.code == INVALID_DIAGRAM_TYPE

    def test_string_diagram_type_accepted(self):
        result = ClassDiagramGenerator().generate(_result(), GenerationOptions(diagram_type="classDiagram"))
        assert result.mermaid_code.startswith("classDiagram")

    def test_emission_failure_is_wrapped(self):
        broken = _class(None)
        with pytest.raises(GenerationError) as exc_info:
            ClassDiagramGenerator().generate(_result([broken]), GenerationOptions())
        assert exc_info.value.code == CLASS_DIAGRAM_GENERATION_ERROR
        assert isinstance(exc_info.value.__cause__, TypeError)
        assert exc_info.value.details["analysis"]["entities"][0]["name"] is None

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            GenerationOptions(direction="UP")
