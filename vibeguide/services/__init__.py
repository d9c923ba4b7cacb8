"""External service clients for vibeguide."""
