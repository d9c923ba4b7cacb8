"""Configuration for vibeguide."""
