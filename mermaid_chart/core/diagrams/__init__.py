"""Mermaid diagram generation from structural analysis.

Public API:
  ClassDiagramGenerator — deterministic classDiagram encoder
  DiagramService — analyze → generate → render orchestrator
  render_mermaid_to_svg — renderer boundary
"""

from .models import DiagramType, GenerationOptions, GenerationResult, RenderOptions, SvgRenderResult
from .renderer import render_mermaid_to_svg, validate_mermaid_code
from .service import DiagramService
from .structural import ClassDiagramGenerator, sanitize_name

__all__ = [
    "ClassDiagramGenerator",
    "DiagramService",
    "DiagramType",
    "GenerationOptions",
    "GenerationResult",
    "RenderOptions",
    "SvgRenderResult",
    "render_mermaid_to_svg",
    "sanitize_name",
    "validate_mermaid_code",
]
