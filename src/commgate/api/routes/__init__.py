"""HTTP routes, one module per provider family."""
