"""Pipeline orchestration for the generate and list commands."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Iterator, List, Optional, Tuple

from .annotations import DEFAULT_VECTOR_TYPES
from .config import CONFIG_FILENAME, WavegenConfig, load_config
from .errors import EntityNotFound, MissingArchitecture, ParseError
from .logging import get_logger
from .models import ParsedEntity, WalkResult
from .render import DEFAULT_PREFIX_TEMPLATE, TclRenderer, format_prefix
from .source_scanner import SourceScanner
from .vhdl import parse_file
from .walker import DeclarationWalker


@dataclass
class GenerateOutcome:
    """Result of a script generation run."""

    path: Path
    source: Path
    entity: str
    shown: int
    suppressed: int


@dataclass
class EntitySummary:
    """One entity discovered while listing a source folder."""

    name: str
    path: Path
    architecture: Optional[str]
    signal_count: int


def generate_script(
    entity: ParsedEntity,
    *,
    vector_types: Collection[str] = DEFAULT_VECTOR_TYPES,
    signal_prefix: str = DEFAULT_PREFIX_TEMPLATE,
    zoom_fit: bool = False,
    explicit_decimal: bool = True,
    templates_dir: Path | None = None,
) -> Tuple[str, WalkResult]:
    """Resolve the entity's architecture and render it as a GTKWave script."""
    if entity.architecture is None:
        raise MissingArchitecture(f"Entity {entity.name} has no architecture")
    result = DeclarationWalker(vector_types).walk(entity.architecture)
    renderer = TclRenderer(
        format_prefix(signal_prefix, entity.name),
        zoom_fit=zoom_fit,
        explicit_decimal=explicit_decimal,
        templates_dir=templates_dir,
    )
    return renderer.render(result.directives), result


class Orchestrator:
    """Coordinates discovery, parsing, resolution and rendering."""

    def __init__(self, scanner: SourceScanner | None = None) -> None:
        self._scanner_override = scanner
        self.logger = get_logger("orchestrator")

    def run_generate(
        self,
        folder: str | Path,
        testbench: str,
        output: str | Path,
        *,
        keep_going: bool = False,
        zoom_fit: bool | None = None,
        signal_prefix: str | None = None,
    ) -> GenerateOutcome:
        """Find ``testbench`` under ``folder`` and write its display script to ``output``."""
        folder_path = Path(folder).expanduser()
        config = self._load_config(folder_path)
        self.logger.info("Searching %s for entity %s", folder_path, testbench)

        target = testbench.lower()
        for path, entities in self._parse_sources(folder_path, config, keep_going=keep_going):
            for entity in entities:
                if entity.name.lower() != target:
                    continue
                self.logger.info("Found entity %s in %s", entity.name, path)
                script, result = generate_script(
                    entity,
                    vector_types=config.vector_types,
                    signal_prefix=signal_prefix if signal_prefix is not None else config.signal_prefix,
                    zoom_fit=config.zoom_fit if zoom_fit is None else zoom_fit,
                    explicit_decimal=config.explicit_decimal,
                    templates_dir=config.templates_dir,
                )
                output_path = Path(output).expanduser()
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(script, encoding="utf-8")
                self.logger.debug(
                    "Wrote %d shown / %d suppressed signals to %s",
                    result.shown,
                    result.suppressed,
                    output_path,
                )
                return GenerateOutcome(
                    path=output_path,
                    source=path,
                    entity=entity.name,
                    shown=result.shown,
                    suppressed=result.suppressed,
                )

        raise EntityNotFound(f"Could not find entity {testbench} under {folder_path}")

    def run_list(self, folder: str | Path, *, keep_going: bool = False) -> List[EntitySummary]:
        """Return every entity declared under ``folder``."""
        folder_path = Path(folder).expanduser()
        config = self._load_config(folder_path)
        summaries: List[EntitySummary] = []
        for path, entities in self._parse_sources(folder_path, config, keep_going=keep_going):
            for entity in entities:
                architecture = entity.architecture
                summaries.append(
                    EntitySummary(
                        name=entity.name,
                        path=path,
                        architecture=architecture.name if architecture else None,
                        signal_count=len(architecture.signal_names()) if architecture else 0,
                    )
                )
        return summaries

    def _load_config(self, folder: Path) -> WavegenConfig:
        config = load_config(folder / CONFIG_FILENAME)
        self.logger.debug("Loaded configuration rooted at %s", config.root)
        return config

    def _scanner_for(self, config: WavegenConfig) -> SourceScanner:
        if self._scanner_override is not None:
            return self._scanner_override
        return SourceScanner(config.sources.include, config.sources.exclude_paths)

    def _parse_sources(
        self, folder: Path, config: WavegenConfig, *, keep_going: bool
    ) -> Iterator[Tuple[Path, List[ParsedEntity]]]:
        for path in self._scanner_for(config).scan(folder):
            self.logger.debug("Parsing %s", path)
            try:
                entities = parse_file(path, encoding=config.encoding)
            except ParseError as exc:
                if not keep_going:
                    raise
                self.logger.warning("Skipping %s: %s", path, exc)
                continue
            yield path, entities


__all__ = ["EntitySummary", "GenerateOutcome", "Orchestrator", "generate_script"]
