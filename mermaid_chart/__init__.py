"""mermaid-chart — source code structure to Mermaid class diagrams."""

__version__ = "0.1.0"
