"""core — error taxonomy, task service and per-app state."""
