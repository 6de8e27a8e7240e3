"""Output renderers."""

from .console import Verbosity, render_analysis, render_call_tree

__all__ = ["Verbosity", "render_analysis", "render_call_tree"]
