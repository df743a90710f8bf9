"""Structural analysis — tree-sitter based entity and relationship extraction.

Public API:
    analyze_source(source, language, options) → AnalysisResult
    analyze_file(path, options) → AnalysisResult
    derive_relationships(entities) → list[Relationship]
    detect_language(file_path) → str | None
"""

from typing import Optional

from .models import (
    AnalysisOptions,
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
)
from .relationships import derive_relationships
from .utils import detect_language, get_analyzer, is_supported_file

__all__ = [
    "analyze_source",
    "analyze_file",
    "derive_relationships",
    "detect_language",
    "get_analyzer",
    "is_supported_file",
    "AnalysisOptions",
    "AnalysisResult",
    "Entity",
    "EntityKind",
    "Method",
    "Parameter",
    "Position",
    "Property",
    "Relationship",
    "RelationshipType",
    "Visibility",
]


def analyze_source(
    source_text: str,
    language: str = "typescript",
    options: Optional[AnalysisOptions] = None,
) -> AnalysisResult:
    """Analyze a source code string.

    Args:
        source_text: Source code as string
        language: Language identifier
        options: Analysis options

    Returns:
        AnalysisResult with entities, relationships, imports and exports
    """
    return get_analyzer(language).analyze(source_text, options)


def analyze_file(file_path: str, options: Optional[AnalysisOptions] = None) -> AnalysisResult:
    """Analyze a source file, detecting its language from the extension.

    Raises:
        ValueError: If the file extension is not supported
        OSError: If the file cannot be read
    """
    language = detect_language(file_path)
    if language is None:
        raise ValueError(f"Unsupported file type: {file_path}")

    with open(file_path, "r", encoding="utf-8", errors="replace") as f:
        source_text = f.read()

    return analyze_source(source_text, language, options)
