"""Pipeline orchestration for a single modulegen run."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List

from .classifier import Defaults, Exclusions, ModuleComponents, classify
from .config import ModulegenConfig, load_config
from .logging import get_logger
from .models import Module, RunMode
from .packages import load_package_sets
from .rationale import load_rationales
from .refs import BuildLookup, KojiBuildLookup, ReferenceResolver
from .render import DocumentEmitter


@dataclass
class RunOutcome:
    """Result of a generation run."""

    mode: RunMode
    modules: Dict[Module, ModuleComponents] = field(default_factory=dict)
    written: List[Path] = field(default_factory=list)


class Generator:
    """Coordinates loading, ref resolution, classification and emission."""

    def __init__(
        self,
        lookup: BuildLookup | None = None,
        *,
        emitter_factory: Callable[[Path], DocumentEmitter] | None = None,
        cwd: Path | None = None,
    ) -> None:
        self._lookup = lookup
        self._emitter_factory = emitter_factory or DocumentEmitter
        self._cwd = cwd
        self.logger = get_logger("orchestrator")

    def run(self, base: Path) -> RunOutcome:
        """Generate every module selected by the base directory's name."""
        base = base.expanduser()
        mode = RunMode.from_base(base.resolve().name)
        config = load_config(base)

        packages = load_package_sets(base, config.arches)

        self.logger.debug("Getting %s component dist-git refs...", mode.value)
        resolver = ReferenceResolver(
            self._cache_path(config),
            self._resolve_lookup(config),
            overrides=config.ref_overrides,
        )
        refs = resolver.resolve(packages.all_identifiers())

        defaults = Defaults(ref=config.default_ref, rationale=config.default_rationale)
        emitter = self._emitter_factory(base)
        outcome = RunOutcome(mode=mode)
        exclusions = Exclusions()

        for module in mode.modules:
            self.logger.debug("Generating %s / %s...", mode.value, module.value)
            rationales = load_rationales(
                base,
                module.value,
                width=config.rationale_width,
                indent=config.rationale_indent,
            )
            components, exclusions = classify(
                module,
                selfhosting=packages.selfhosting,
                runtime=packages.runtime,
                refs=refs,
                rationales=rationales,
                exclusions=exclusions,
                defaults=defaults,
            )
            outcome.modules[module] = components
            outcome.written.extend(self._emit(emitter, module, components, config))

        self.logger.debug("Done with %s.", mode.value)
        return outcome

    def _emit(
        self,
        emitter: DocumentEmitter,
        module: Module,
        components: ModuleComponents,
        config: ModulegenConfig,
    ) -> List[Path]:
        written = [emitter.emit(module.value, components)]
        variant = config.variant
        if variant is None:
            return written
        if not emitter.has_template(module.value, variant.name):
            self.logger.debug("No %s template for %s; skipping", variant.name, module.value)
            return written
        patched = components.with_reference(variant.components, variant.ref)
        written.append(emitter.emit(module.value, patched, variant=variant.name))
        return written

    def _cache_path(self, config: ModulegenConfig) -> Path:
        if config.cache_path.is_absolute():
            return config.cache_path
        return (self._cwd or Path.cwd()) / config.cache_path

    def _resolve_lookup(self, config: ModulegenConfig) -> BuildLookup:
        if self._lookup is not None:
            return self._lookup
        return KojiBuildLookup(config.koji.hub)


__all__ = ["Generator", "RunOutcome"]
