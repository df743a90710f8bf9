"""TypeScript structural analyzer using tree-sitter.

Recovers classes, interfaces, functions and enums with their members,
modifiers and declared supertypes. Dispatch is a fixed table from
node kind to extraction rule; every other kind is walked through.
"""

import logging
from typing import Callable, Dict, Iterator, List, Optional

import tree_sitter
import tree_sitter_typescript

from .base import BaseLanguageAnalyzer
from .models import (
    DEFAULT_RETURN_TYPE,
    ENUM_MEMBER_TYPE,
    UNKNOWN_NAME,
    UNTYPED,
    AnalysisOptions,
    Entity,
    EntityKind,
    Method,
    Parameter,
    Position,
    Property,
    Visibility,
)

logger = logging.getLogger(__name__)

_TS_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_typescript())
_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())

# Keyword tokens recognised as declaration modifiers (direct children only)
MODIFIER_KEYWORDS = frozenset({"public", "private", "protected", "static", "abstract", "readonly"})

PROPERTY_NODE_TYPES = frozenset({"public_field_definition", "property_signature"})
METHOD_NODE_TYPES = frozenset({"method_definition", "method_signature", "abstract_method_signature"})
INTERFACE_PROPERTY_NODE_TYPES = frozenset({"property_signature"})
INTERFACE_METHOD_NODE_TYPES = frozenset({"method_signature"})
PARAMETER_NODE_TYPES = frozenset({"required_parameter", "optional_parameter"})
IMPLEMENTS_TYPE_NODES = frozenset({"type_identifier", "nested_type_identifier"})


class TypeScriptAnalyzer(BaseLanguageAnalyzer):
    """tree-sitter based TypeScript analyzer.

    Extracts:
    - class_declaration / abstract_class_declaration -> EntityKind.CLASS
    - interface_declaration -> EntityKind.INTERFACE
    - function_declaration -> EntityKind.FUNCTION (one synthetic method)
    - enum_declaration -> EntityKind.ENUM (one property per member)
    """

    def __init__(self):
        self._handlers: Dict[str, Callable[[tree_sitter.Node, bytes, AnalysisOptions], Entity]] = {
            "class_declaration": self._extract_class,
            "abstract_class_declaration": self._extract_class,
            "interface_declaration": self._extract_interface,
            "function_declaration": self._extract_function,
            "generator_function_declaration": self._extract_function,
            "enum_declaration": self._extract_enum,
        }

    def get_language(self) -> str:
        return "typescript"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TS_LANGUAGE

    def extract_entities(
        self, root: tree_sitter.Node, source: bytes, options: AnalysisOptions
    ) -> List[Entity]:
        """Walk the whole tree pre-order, dispatching declaration nodes.

        Nesting depth counts enclosing declarations; anything enclosed by
        ``max_depth`` or more declarations is left out.
        """
        entities: List[Entity] = []
        stack = [(root, 0)]

        while stack:
            node, depth = stack.pop()
            handler = self._handlers.get(node.type)
            if handler is not None:
                if depth >= options.max_depth:
                    logger.debug(
                        "Skipping %s at line %d: nesting depth %d exceeds max_depth",
                        node.type, node.start_point[0] + 1, depth,
                    )
                    continue
                entities.append(handler(node, source, options))
                depth += 1
            stack.extend((child, depth) for child in reversed(node.children))

        return entities

    def extract_imports(self, root: tree_sitter.Node, source: bytes) -> List[str]:
        """Module specifiers of every import statement, quotes stripped."""
        imports = []
        for node in self.walk(root):
            if node.type == "import_statement":
                spec = self._get_child_text(node, "source", source)
                if spec:
                    imports.append(spec.strip("'\"`"))
        return imports

    def extract_exports(self, root: tree_sitter.Node, source: bytes) -> List[str]:
        """Names exported by export statements."""
        exports: List[str] = []
        for node in root.children:
            if node.type != "export_statement":
                continue

            declaration = node.child_by_field_name("declaration")
            if declaration is not None:
                if declaration.type in ("lexical_declaration", "variable_declaration"):
                    for declarator in declaration.children:
                        if declarator.type == "variable_declarator":
                            name = self._get_child_text(declarator, "name", source)
                            if name:
                                exports.append(name)
                else:
                    name = self._get_child_text(declaration, "name", source)
                    if name:
                        exports.append(name)
                continue

            clause = self._get_child_by_type(node, "export_clause")
            if clause is not None:
                for spec in clause.children:
                    if spec.type == "export_specifier":
                        alias = self._get_child_text(spec, "alias", source)
                        name = alias or self._get_child_text(spec, "name", source)
                        if name:
                            exports.append(name)
                continue

            if any(child.type == "default" for child in node.children):
                exports.append("default")

        return exports

    # =========================================================================
    # Declaration rules
    # =========================================================================

    def _extract_class(self, node: tree_sitter.Node, source: bytes, options: AnalysisOptions) -> Entity:
        entity = Entity(
            kind=EntityKind.CLASS,
            name=self._declaration_name(node, source),
            position=Position(*self._position(node)),
            modifiers=self._extract_modifiers(node, source),
            extends=self._extract_extends(node, source),
            implements=self._extract_implements(node, source),
        )
        self._collect_members(entity, node, source, options, PROPERTY_NODE_TYPES, METHOD_NODE_TYPES)
        return entity

    def _extract_interface(self, node: tree_sitter.Node, source: bytes, options: AnalysisOptions) -> Entity:
        entity = Entity(
            kind=EntityKind.INTERFACE,
            name=self._declaration_name(node, source),
            position=Position(*self._position(node)),
            extends=self._extract_extends(node, source),
        )
        self._collect_members(
            entity, node, source, options, INTERFACE_PROPERTY_NODE_TYPES, INTERFACE_METHOD_NODE_TYPES
        )
        return entity

    def _extract_function(self, node: tree_sitter.Node, source: bytes, options: AnalysisOptions) -> Entity:
        name = self._declaration_name(node, source)
        return Entity(
            kind=EntityKind.FUNCTION,
            name=name,
            position=Position(*self._position(node)),
            methods=[
                Method(
                    name=name,
                    parameters=self._extract_parameters(node, source),
                    return_type=self._type_text(node.child_by_field_name("return_type"), source, DEFAULT_RETURN_TYPE),
                )
            ],
        )

    def _extract_enum(self, node: tree_sitter.Node, source: bytes, options: AnalysisOptions) -> Entity:
        entity = Entity(
            kind=EntityKind.ENUM,
            name=self._declaration_name(node, source),
            position=Position(*self._position(node)),
        )
        body = node.child_by_field_name("body")
        if body is None:
            return entity

        for child in body.named_children:
            if child.type == "enum_assignment":
                member = self._get_child_text(child, "name", source)
            elif child.type in ("property_identifier", "string", "number", "computed_property_name"):
                member = self.node_text(child, source)
            else:
                continue
            if member:
                entity.properties.append(Property(name=member.strip("'\""), type=ENUM_MEMBER_TYPE))

        return entity

    # =========================================================================
    # Members
    # =========================================================================

    def _collect_members(
        self,
        entity: Entity,
        node: tree_sitter.Node,
        source: bytes,
        options: AnalysisOptions,
        property_types: frozenset,
        method_types: frozenset,
    ) -> None:
        body = node.child_by_field_name("body")
        if body is None:
            logger.debug("%s '%s' has no body", entity.kind.value, entity.name)
            return

        member_types = property_types | method_types
        for member in self._iter_members(body, member_types):
            if member.type in property_types:
                item = self._extract_property(member, source)
                target = entity.properties
            else:
                item = self._extract_method(member, source)
                target = entity.methods
            if item is None:
                continue
            if not options.include_private and item.visibility is Visibility.PRIVATE:
                continue
            target.append(item)

    def _iter_members(self, body: tree_sitter.Node, member_types: frozenset) -> Iterator[tree_sitter.Node]:
        """Yield member nodes of ``body`` in source order.

        Members are always direct children of the body. Static blocks,
        method bodies and inner classes are never searched.
        """
        for node in body.children:
            if node.type in member_types:
                yield node

    def _extract_property(self, node: tree_sitter.Node, source: bytes) -> Optional[Property]:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None

        modifiers = self._extract_modifiers(node, source)
        visibility = self._visibility(modifiers)
        if name_node.type == "private_property_identifier":
            visibility = Visibility.PRIVATE

        return Property(
            name=self.node_text(name_node, source),
            type=self._type_text(node.child_by_field_name("type"), source, UNTYPED),
            visibility=visibility,
            is_static="static" in modifiers,
            is_readonly="readonly" in modifiers,
        )

    def _extract_method(self, node: tree_sitter.Node, source: bytes) -> Optional[Method]:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return None

        modifiers = self._extract_modifiers(node, source)
        visibility = self._visibility(modifiers)
        if name_node.type == "private_property_identifier":
            visibility = Visibility.PRIVATE

        return Method(
            name=self.node_text(name_node, source),
            parameters=self._extract_parameters(node, source),
            return_type=self._type_text(node.child_by_field_name("return_type"), source, DEFAULT_RETURN_TYPE),
            visibility=visibility,
            is_static="static" in modifiers,
            is_abstract="abstract" in modifiers,
        )

    def _extract_parameters(self, node: tree_sitter.Node, source: bytes) -> List[Parameter]:
        """Immediate required/optional parameter children of the parameters field."""
        params_node = node.child_by_field_name("parameters")
        if params_node is None:
            return []

        parameters = []
        for child in params_node.children:
            if child.type not in PARAMETER_NODE_TYPES:
                continue
            name = self._get_child_text(child, "pattern", source)
            if not name:
                continue
            parameters.append(Parameter(
                name=name,
                type=self._type_text(child.child_by_field_name("type"), source, UNTYPED),
                optional=child.type == "optional_parameter",
            ))
        return parameters

    # =========================================================================
    # Modifiers and supertypes
    # =========================================================================

    def _extract_modifiers(self, node: tree_sitter.Node, source: bytes) -> List[str]:
        """Modifier keywords that are direct children of ``node``."""
        modifiers = []
        for child in node.children:
            if child.type in MODIFIER_KEYWORDS:
                modifiers.append(child.type)
            elif child.type == "accessibility_modifier":
                keyword = self.node_text(child, source).strip()
                if keyword in MODIFIER_KEYWORDS:
                    modifiers.append(keyword)
        return modifiers

    @staticmethod
    def _visibility(modifiers: List[str]) -> Visibility:
        if "private" in modifiers:
            return Visibility.PRIVATE
        if "protected" in modifiers:
            return Visibility.PROTECTED
        return Visibility.PUBLIC

    def _extract_extends(self, node: tree_sitter.Node, source: bytes) -> List[str]:
        """Supertype names from a class extends clause or interface extends list."""
        names: List[str] = []
        for child in node.children:
            if child.type == "class_heritage":
                clause = self._get_child_by_type(child, "extends_clause")
                if clause is not None:
                    names.extend(self.node_text(v, source) for v in clause.children_by_field_name("value"))
            elif child.type == "extends_type_clause":
                names.extend(self._type_name(t, source) for t in self._clause_types(child))
        return names

    def _extract_implements(self, node: tree_sitter.Node, source: bytes) -> List[str]:
        heritage = self._get_child_by_type(node, "class_heritage")
        if heritage is None:
            return []
        clause = self._get_child_by_type(heritage, "implements_clause")
        if clause is None:
            return []

        names = []
        for child in clause.children:
            if child.type in IMPLEMENTS_TYPE_NODES or child.type == "generic_type":
                names.append(self._type_name(child, source))
        return names

    # =========================================================================
    # Helpers
    # =========================================================================

    def _declaration_name(self, node: tree_sitter.Node, source: bytes) -> str:
        name = self._get_child_text(node, "name", source)
        if not name:
            logger.debug("%s at line %d has no name", node.type, node.start_point[0] + 1)
            return UNKNOWN_NAME
        return name

    def _type_name(self, node: tree_sitter.Node, source: bytes) -> str:
        """Name of a type reference, without type arguments."""
        if node.type == "generic_type":
            name = self._get_child_text(node, "name", source)
            if name:
                return name
        return self.node_text(node, source)

    def _type_text(self, node: Optional[tree_sitter.Node], source: bytes, default: str) -> str:
        """Raw type text, unwrapping ``: T`` annotations."""
        if node is None:
            return default
        if node.type.endswith("_annotation"):
            inner = node.named_children
            text = self.node_text(inner[0], source) if inner else self.node_text(node, source).lstrip(":")
        else:
            text = self.node_text(node, source)
        return text.strip() or default

    @staticmethod
    def _clause_types(clause: tree_sitter.Node) -> List[tree_sitter.Node]:
        """Type children of an interface ``extends`` clause."""
        typed = clause.children_by_field_name("type")
        if typed:
            return typed
        return [c for c in clause.named_children if c.type != "comment"]

    @staticmethod
    def _get_child_by_type(node: tree_sitter.Node, type_name: str) -> Optional[tree_sitter.Node]:
        for child in node.children:
            if child.type == type_name:
                return child
        return None


class TsxAnalyzer(TypeScriptAnalyzer):
    """Same rules over the TSX grammar."""

    def get_language(self) -> str:
        return "tsx"

    def get_tree_sitter_language(self) -> tree_sitter.Language:
        return _TSX_LANGUAGE
