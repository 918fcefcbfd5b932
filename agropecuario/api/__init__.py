"""HTTP adapter - routes, dependencies and error mapping."""
