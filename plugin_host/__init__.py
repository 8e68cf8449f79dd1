"""Plugin host: discover, validate, register and hand off third-party plugins."""
