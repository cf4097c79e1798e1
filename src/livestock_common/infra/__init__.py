"""Infrastructure layer for external communication."""
