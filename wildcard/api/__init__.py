"""HTTP API: routes, middleware, models and dependencies."""
