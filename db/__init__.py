"""Schema definitions for the local report store."""
