"""DiagramService — orchestrator for code → Mermaid → SVG generation.

Analysis and encoding are deterministic and always run. Rendering is
optional; a render failure is reported next to the diagram text rather
than discarding it.
"""

import logging
from typing import Any, Dict, Optional

from ..ast_parser import AnalysisOptions, analyze_source
from ..exceptions import INVALID_DIAGRAM_TYPE, GenerationError, RenderError
from .models import DiagramType, GenerationOptions, RenderOptions
from .renderer import render_mermaid_to_svg
from .structural import ClassDiagramGenerator

logger = logging.getLogger(__name__)

# Diagram kinds with a code-driven generator
_GENERATORS = {
    DiagramType.CLASS_DIAGRAM: ClassDiagramGenerator,
}


class DiagramService:
    """Runs the analyze → generate → render pipeline for one source document."""

    def __init__(self, server_url: Optional[str] = None):
        """Initialize DiagramService.

        Args:
            server_url: Override for the HTTP render server
        """
        self._server_url = server_url

    @staticmethod
    def supported_diagram_types():
        return sorted(t.value for t in _GENERATORS)

    def generate(
        self,
        code: str,
        language: str = "typescript",
        analysis_options: Optional[AnalysisOptions] = None,
        generation_options: Optional[GenerationOptions] = None,
        render: bool = False,
        render_options: Optional[RenderOptions] = None,
    ) -> Dict[str, Any]:
        """Generate a diagram for a source document.

        Returns:
            {mermaidCode, diagramType, analysis, generation[, svg | renderError]}

        Raises:
            AnalysisError: If the source could not be analyzed
            GenerationError: If the diagram kind has no generator or encoding fails
            ValueError: If the language is not supported
        """
        generation_options = generation_options or GenerationOptions()
        generator = self._generator_for(generation_options.diagram_type)

        analysis = analyze_source(code, language, analysis_options)
        generated = generator.generate(analysis, generation_options)

        response: Dict[str, Any] = {
            "mermaidCode": generated.mermaid_code,
            "diagramType": generated.diagram_type.value,
            "analysis": analysis.to_dict()["metadata"],
            "generation": generated.to_dict()["metadata"],
        }

        if render:
            render_options = render_options or RenderOptions(theme=generation_options.theme)
            try:
                svg_result = render_mermaid_to_svg(generated.mermaid_code, render_options, self._server_url)
            except RenderError as e:
                logger.warning("Mermaid render failed for %s: %s", generated.diagram_type.value, e)
                response["renderError"] = e.to_dict()
            else:
                response["svg"] = svg_result.to_dict()

        return response

    @staticmethod
    def _generator_for(diagram_type):
        try:
            kind = diagram_type if isinstance(diagram_type, DiagramType) else DiagramType(diagram_type)
        except ValueError:
            kind = None

        generator_cls = _GENERATORS.get(kind)
        if generator_cls is None:
            raise GenerationError(
                f"Unsupported diagram type {getattr(diagram_type, 'value', diagram_type)!r}. "
                f"Supported: {', '.join(DiagramService.supported_diagram_types())}",
                INVALID_DIAGRAM_TYPE,
                {"requested_type": getattr(diagram_type, "value", diagram_type)},
            )
        return generator_cls()
