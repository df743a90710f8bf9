"""Pydantic schemas for API request/response models."""

from .diagram import (
    AnalysisOptionsModel,
    AnalyzeRequest,
    GenerateDiagramRequest,
    GenerationOptionsModel,
    RenderOptionsModel,
    RenderRequest,
)

__all__ = [
    'AnalysisOptionsModel',
    'AnalyzeRequest',
    'GenerateDiagramRequest',
    'GenerationOptionsModel',
    'RenderOptionsModel',
    'RenderRequest',
]
