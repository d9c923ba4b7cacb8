"""Textual TUI for vibeguide.

- ``guide_app``: the application, key bindings and idle timers
- ``guide_grid``: channel grid widgets
- ``scroll_viewport``: adapter from a scroll container to the navigator's viewport
- ``themes``: colour themes
"""
