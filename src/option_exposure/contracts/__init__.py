"""Column contracts shared by frame adapters."""
