"""HTTP API for mermaid-chart."""
