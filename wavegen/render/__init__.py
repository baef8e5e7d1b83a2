"""Output renderers for resolved display directives."""

from .tcl import DEFAULT_PREFIX_TEMPLATE, TclRenderer, format_prefix

__all__ = ["DEFAULT_PREFIX_TEMPLATE", "TclRenderer", "format_prefix"]
