"""Diagram generation and rendering data contracts."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

DIRECTIONS = ("TB", "BT", "LR", "RL")
THEMES = ("default", "neutral", "dark", "forest", "base")


class DiagramType(Enum):
    """Mermaid diagram kinds."""
    CLASS_DIAGRAM = "classDiagram"
    FLOWCHART = "flowchart"
    SEQUENCE_DIAGRAM = "sequenceDiagram"
    STATE_DIAGRAM = "stateDiagram"
    ENTITY_RELATIONSHIP = "erDiagram"
    GIT_GRAPH = "gitgraph"
    TIMELINE = "timeline"


@dataclass
class GenerationOptions:
    # Plain strings are accepted so unknown kinds reach the generator and are rejected there
    diagram_type: Any = DiagramType.CLASS_DIAGRAM
    direction: Optional[str] = "TB"
    include_title: bool = False
    title: Optional[str] = None
    theme: str = "default"

    def __post_init__(self):
        if self.direction is not None and self.direction not in DIRECTIONS:
            raise ValueError(f"direction must be one of {', '.join(DIRECTIONS)}, got {self.direction!r}")
        if self.theme not in THEMES:
            raise ValueError(f"theme must be one of {', '.join(THEMES)}, got {self.theme!r}")


@dataclass
class GenerationResult:
    mermaid_code: str
    diagram_type: DiagramType
    node_count: int
    edge_count: int
    generation_time: float  # milliseconds

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mermaidCode": self.mermaid_code,
            "diagramType": self.diagram_type.value,
            "metadata": {
                "nodeCount": self.node_count,
                "edgeCount": self.edge_count,
                "generationTime": self.generation_time,
            },
        }


@dataclass
class RenderOptions:
    width: Optional[int] = None
    height: Optional[int] = None
    background_color: str = "white"
    theme: str = "default"


@dataclass
class SvgRenderResult:
    svg: str
    width: int
    height: int
    render_time: float = 0.0  # milliseconds
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def file_size(self) -> int:
        return len(self.svg)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "svg": self.svg,
            "width": self.width,
            "height": self.height,
            "metadata": {"renderTime": self.render_time, "fileSize": self.file_size, **self.metadata},
        }
