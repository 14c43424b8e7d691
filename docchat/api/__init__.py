"""HTTP transport shim for the docchat pipeline."""
