"""Desktop host for Theo Runner."""
