"""Shared helpers for vibeguide."""
