"""Diagram API routes — code analysis, Mermaid generation and rendering.

  POST /analyze    → structural analysis of a source document
  POST /diagrams   → Mermaid diagram (optionally rendered to SVG)
  POST /render     → render Mermaid text to SVG
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ...core.ast_parser import analyze_source
from ...core.diagrams import render_mermaid_to_svg
from ...core.exceptions import EMPTY_MERMAID_CODE, AnalysisError, GenerationError, RenderError
from ..deps import get_diagram_service
from ..schemas import AnalyzeRequest, GenerateDiagramRequest, RenderRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["diagrams"])


@router.post("/analyze")
def analyze_code(body: AnalyzeRequest):
    """Extract entities, relationships, imports and exports from code."""
    try:
        result = analyze_source(body.code, body.language, body.options.to_options())
    except AnalysisError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail={"code": "INVALID_REQUEST", "message": str(e)})
    return result.to_dict()


@router.post("/diagrams")
def generate_diagram(body: GenerateDiagramRequest, diagram_service=Depends(get_diagram_service)):
    """Generate a Mermaid diagram from code.

    The diagram text is always returned; rendering problems are reported
    under ``renderError`` when ``render`` is requested.
    """
    try:
        return diagram_service.generate(
            body.code,
            language=body.language,
            analysis_options=body.analysis.to_options(),
            generation_options=body.generation.to_options(body.diagramType),
            render=body.render,
            render_options=body.renderOptions.to_options() if body.renderOptions else None,
        )
    except (AnalysisError, GenerationError) as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    except ValueError as e:
        raise HTTPException(status_code=400, detail={"code": "INVALID_REQUEST", "message": str(e)})


@router.post("/render")
def render_svg(body: RenderRequest):
    """Render Mermaid text to SVG."""
    try:
        result = render_mermaid_to_svg(body.mermaidCode, body.options.to_options())
    except RenderError as e:
        status = 400 if e.code == EMPTY_MERMAID_CODE else 502
        raise HTTPException(status_code=status, detail=e.to_dict())
    return result.to_dict()
