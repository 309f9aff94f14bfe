"""HTTP primitives — immutable request, query and response types."""
