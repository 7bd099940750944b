"""Backend-agnostic layout engine."""
