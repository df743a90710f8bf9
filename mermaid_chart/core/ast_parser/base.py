"""Base interface for language-specific structural analyzers.

Defines the Strategy pattern base class that all language analyzers implement.
Shared analysis flow lives here; language-specific extraction is delegated.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Tuple

import tree_sitter

from ..exceptions import TYPESCRIPT_ANALYSIS_ERROR, AnalysisError
from .models import AnalysisOptions, AnalysisResult, Entity
from .relationships import derive_relationships

logger = logging.getLogger(__name__)


class BaseLanguageAnalyzer(ABC):
    """Abstract base for tree-sitter backed structural analyzers.

    Subclasses implement:
    - get_language(): returns language name string
    - get_tree_sitter_language(): returns tree-sitter Language object
    - extract_entities(): walks AST tree and extracts Entity objects
    - extract_imports() / extract_exports(): module-level import/export names
    """

    error_code = TYPESCRIPT_ANALYSIS_ERROR

    @abstractmethod
    def get_language(self) -> str:
        """Return the language identifier (e.g., 'typescript')."""
        ...

    @abstractmethod
    def get_tree_sitter_language(self) -> tree_sitter.Language:
        """Return the tree-sitter Language object for this language."""
        ...

    @abstractmethod
    def extract_entities(
        self, root: tree_sitter.Node, source: bytes, options: AnalysisOptions
    ) -> List[Entity]:
        """Extract structural entities from a parsed syntax tree.

        Must not raise for incomplete trees: missing names become the
        ``Unknown`` sentinel and missing bodies become empty member lists.

        Args:
            root: Root node of the parsed tree
            source: Raw source bytes
            options: Analysis options (private filtering, depth bound)

        Returns:
            Entities in source order
        """
        ...

    @abstractmethod
    def extract_imports(self, root: tree_sitter.Node, source: bytes) -> List[str]:
        ...

    @abstractmethod
    def extract_exports(self, root: tree_sitter.Node, source: bytes) -> List[str]:
        ...

    def parse(self, source_bytes: bytes) -> tree_sitter.Tree:
        parser = tree_sitter.Parser(self.get_tree_sitter_language())
        return parser.parse(source_bytes)

    def analyze(self, source_text: str, options: Optional[AnalysisOptions] = None) -> AnalysisResult:
        """Analyze source code into entities, relationships, imports and exports.

        Args:
            source_text: Source code as string
            options: Analysis options; defaults apply when omitted

        Returns:
            AnalysisResult for this document

        Raises:
            AnalysisError: If the source could not be parsed or walked at all
        """
        options = options or AnalysisOptions()
        start = time.perf_counter()
        source_bytes = source_text.encode("utf-8")

        try:
            tree = self.parse(source_bytes)
            root = tree.root_node

            # Partial trees are still walked; extraction degrades per node
            if root.has_error:
                logger.warning("tree-sitter reported syntax errors; extracting best-effort structure")

            entities = self.extract_entities(root, source_bytes, options)
            imports = self.extract_imports(root, source_bytes)
            exports = self.extract_exports(root, source_bytes)
        except Exception as e:
            logger.error("%s analysis failed: %s", self.get_language(), e)
            raise AnalysisError(
                f"{self.get_language()} analysis failed: {e}",
                self.error_code,
                {"error": repr(e), "code": source_text[:100]},
            ) from e

        relationships = derive_relationships(entities)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.debug(
            "Analyzed %d entities, %d relationships in %.1fms",
            len(entities), len(relationships), elapsed_ms,
        )

        return AnalysisResult(
            entities=entities,
            relationships=relationships,
            imports=imports,
            exports=exports,
            language=self.get_language(),
            total_lines=len(source_text.split("\n")),
            analysis_time=elapsed_ms,
        )

    # =========================================================================
    # Shared tree helpers
    # =========================================================================

    @staticmethod
    def walk(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
        """Pre-order depth-first traversal using an explicit stack."""
        stack = [root]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    @staticmethod
    def node_text(node: tree_sitter.Node, source: bytes) -> str:
        return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    @classmethod
    def _get_child_text(cls, node: tree_sitter.Node, field_name: str, source: bytes) -> Optional[str]:
        child = node.child_by_field_name(field_name)
        if child:
            return cls.node_text(child, source)
        return None

    @staticmethod
    def _position(node: tree_sitter.Node) -> Tuple[int, int]:
        row, column = node.start_point
        return row + 1, column + 1
