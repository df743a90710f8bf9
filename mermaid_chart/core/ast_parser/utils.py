"""AST analyzer utilities.

Language detection and the analyzer registry.
"""

import os
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .base import BaseLanguageAnalyzer

# Extension → language mapping
SUPPORTED_EXTENSIONS: Dict[str, str] = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

# Analyzer registry, loaded lazily
_analyzer_registry: Dict[str, "BaseLanguageAnalyzer"] = {}


def detect_language(file_path: str) -> Optional[str]:
    """Detect source language from file extension.

    Args:
        file_path: Path to the source file

    Returns:
        Language identifier string or None if unsupported
    """
    _, ext = os.path.splitext(file_path)
    return SUPPORTED_EXTENSIONS.get(ext.lower())


def get_analyzer(language: str) -> "BaseLanguageAnalyzer":
    """Get an analyzer instance for the given language.

    Analyzers hold no per-call state, so one instance per language is
    shared by every caller.

    Args:
        language: Language identifier (e.g., "typescript")

    Returns:
        Analyzer instance

    Raises:
        ValueError: If language is not supported
    """
    if language not in _analyzer_registry:
        if language == "typescript":
            from .typescript_parser import TypeScriptAnalyzer
            _analyzer_registry["typescript"] = TypeScriptAnalyzer()
        elif language == "tsx":
            from .typescript_parser import TsxAnalyzer
            _analyzer_registry["tsx"] = TsxAnalyzer()
        else:
            raise ValueError(
                f"Unsupported language: {language}. "
                f"Supported: {sorted(set(SUPPORTED_EXTENSIONS.values()))}"
            )

    return _analyzer_registry[language]


def is_supported_file(file_path: str) -> bool:
    return detect_language(file_path) is not None
