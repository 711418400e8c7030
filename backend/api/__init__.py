"""HTTP layer: routes, dependencies, helpers."""
