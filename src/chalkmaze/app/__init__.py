"""Optional presentation front-ends. Nothing in the core imports this package."""
