"""Application layer: startup container, document loading and services."""
