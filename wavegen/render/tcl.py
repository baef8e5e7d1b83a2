"""GTKWave TCL rendering for resolved display directives."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader

from ..models import Blank, Directive, Format, Show

DEFAULT_PREFIX_TEMPLATE = "top.{entity}."
TEMPLATE_NAME = "gtkwave.tcl.j2"


def format_prefix(template: str, entity: str) -> str:
    """Expand ``{entity}`` in a signal prefix template."""
    return template.replace("{entity}", entity)


class TclRenderer:
    """Renders directives as a GTKWave TCL script.

    Templates are looked up in ``templates_dir`` first, then in the templates
    shipped with the package. With ``explicit_decimal`` off, decimal signals
    get no ``Data_Format`` command and keep GTKWave's default.
    """

    def __init__(
        self,
        signal_prefix: str = "",
        *,
        zoom_fit: bool = False,
        explicit_decimal: bool = True,
        templates_dir: Path | None = None,
    ) -> None:
        self.signal_prefix = signal_prefix
        self.zoom_fit = zoom_fit
        self.explicit_decimal = explicit_decimal
        self._env = _create_env(templates_dir)

    def render(self, directives: Iterable[Directive]) -> str:
        template = self._env.get_template(TEMPLATE_NAME)
        return template.render(
            prefix=self.signal_prefix,
            rows=[_row(directive, self.explicit_decimal) for directive in directives],
            zoom_fit=self.zoom_fit,
        )


def _row(directive: Directive, explicit_decimal: bool) -> Dict[str, Optional[object]]:
    if isinstance(directive, Blank):
        return {"blank": True}
    if isinstance(directive, Show):
        fmt = directive.format
        if fmt is Format.DECIMAL and not explicit_decimal:
            # GTKWave shows untouched traces as decimal already
            fmt = None
        return {
            "blank": False,
            "name": directive.name,
            "color": directive.color.value if directive.color is not None else None,
            "format": fmt.value if fmt is not None else None,
        }
    raise TypeError(f"Unsupported directive: {directive!r}")


def _create_env(templates_dir: Path | None) -> Environment:
    directories: List[str] = []
    if templates_dir:
        directories.append(str(templates_dir))
    directories.append(str(Path(__file__).with_name("templates")))
    return Environment(
        loader=FileSystemLoader(directories),
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


__all__ = ["DEFAULT_PREFIX_TEMPLATE", "TEMPLATE_NAME", "TclRenderer", "format_prefix"]
