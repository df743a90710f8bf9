"""Analysis, generation and render request schemas."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from ...core.ast_parser import AnalysisOptions
from ...core.diagrams import GenerationOptions, RenderOptions

Direction = Literal["TB", "BT", "LR", "RL"]
Theme = Literal["default", "neutral", "dark", "forest", "base"]


class AnalysisOptionsModel(BaseModel):
    """Code analysis options."""
    includePrivate: bool = Field(True, description="Keep private members")
    includeComments: bool = Field(False, description="Reserved; comments are not extracted")
    maxDepth: int = Field(5, ge=1, le=10, description="Maximum declaration nesting depth")

    def to_options(self) -> AnalysisOptions:
        return AnalysisOptions(
            include_private=self.includePrivate,
            include_comments=self.includeComments,
            max_depth=self.maxDepth,
        )


class GenerationOptionsModel(BaseModel):
    """Mermaid generation options."""
    direction: Direction = Field("TB", description="Layout direction")
    includeTitle: bool = Field(False, description="Emit the title line")
    title: Optional[str] = Field(None, description="Diagram title")
    theme: Theme = Field("default", description="Mermaid theme")

    def to_options(self, diagram_type: str) -> GenerationOptions:
        return GenerationOptions(
            diagram_type=diagram_type,
            direction=self.direction,
            include_title=self.includeTitle,
            title=self.title,
            theme=self.theme,
        )


class RenderOptionsModel(BaseModel):
    """SVG render options."""
    width: Optional[int] = Field(None, gt=0, description="Output width in px")
    height: Optional[int] = Field(None, gt=0, description="Output height in px")
    backgroundColor: str = Field("white", description="Background fill, or 'transparent'")
    theme: Theme = Field("default", description="Mermaid theme")

    def to_options(self) -> RenderOptions:
        return RenderOptions(
            width=self.width,
            height=self.height,
            background_color=self.backgroundColor,
            theme=self.theme,
        )


class AnalyzeRequest(BaseModel):
    """Analyze code request."""
    code: str = Field(..., description="Source code to analyze")
    language: str = Field("typescript", description="Source language")
    options: AnalysisOptionsModel = Field(default_factory=AnalysisOptionsModel)


class GenerateDiagramRequest(BaseModel):
    """Generate diagram request."""
    code: str = Field(..., description="Source code to analyze")
    language: str = Field("typescript", description="Source language")
    diagramType: str = Field("classDiagram", description="Mermaid diagram kind")
    render: bool = Field(False, description="Also render to SVG")
    analysis: AnalysisOptionsModel = Field(default_factory=AnalysisOptionsModel)
    generation: GenerationOptionsModel = Field(default_factory=GenerationOptionsModel)
    renderOptions: Optional[RenderOptionsModel] = Field(None, description="Render options")


class RenderRequest(BaseModel):
    """Render Mermaid code request."""
    mermaidCode: str = Field(..., description="Mermaid diagram text")
    options: RenderOptionsModel = Field(default_factory=RenderOptionsModel)
