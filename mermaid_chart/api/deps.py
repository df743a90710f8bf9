"""FastAPI dependencies for mermaid-chart.

Provides shared services via FastAPI's Depends() injection system.
"""

from fastapi import Request


async def get_diagram_service(request: Request):
    """Get DiagramService from app state."""
    return request.app.state.diagram_service
