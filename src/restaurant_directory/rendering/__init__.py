"""Rendering: Jinja2 templates turned into view fragments."""

from restaurant_directory.rendering.renderer import (
    PLACEHOLDER_CLASS,
    Renderer,
    create_environment,
    theme_for_position,
)

__all__ = ["PLACEHOLDER_CLASS", "Renderer", "create_environment", "theme_for_position"]
