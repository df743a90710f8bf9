"""Core analysis and diagram generation for mermaid-chart."""
