"""Product image catalogue service."""
