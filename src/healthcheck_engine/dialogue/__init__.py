"""Dialogue rendering.

Provides ``DialogueRenderer``, a Jinja2-based template engine that renders
every message the engine speaks, from the greeting to the summary narrative.
"""

from healthcheck_engine.dialogue.renderer import DialogueRenderer

__all__ = ["DialogueRenderer"]
