"""HTTP and validation helpers."""
