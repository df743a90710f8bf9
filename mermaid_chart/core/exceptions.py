"""Error types raised by the analysis, generation and render stages.

Every error carries a machine-readable ``code`` and a ``details`` dict
holding enough of the input to reconstruct the failure.
"""

from typing import Any, Dict, Optional

# Analysis
TYPESCRIPT_ANALYSIS_ERROR = "TYPESCRIPT_ANALYSIS_ERROR"

# Generation
INVALID_DIAGRAM_TYPE = "INVALID_DIAGRAM_TYPE"
CLASS_DIAGRAM_GENERATION_ERROR = "CLASS_DIAGRAM_GENERATION_ERROR"

# Rendering
EMPTY_MERMAID_CODE = "EMPTY_MERMAID_CODE"
SVG_RENDER_ERROR = "SVG_RENDER_ERROR"
NO_SVG_ELEMENT = "NO_SVG_ELEMENT"


class MermaidChartError(Exception):
    """Base class for pipeline errors."""

    def __init__(self, message: str, code: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, str]:
        return {"code": self.code, "message": self.message}


class AnalysisError(MermaidChartError):
    """No syntax tree could be obtained for the source."""


class GenerationError(MermaidChartError):
    """Diagram text could not be produced."""


class RenderError(MermaidChartError):
    """Diagram text could not be turned into SVG."""
