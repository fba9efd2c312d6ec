"""Render module descriptors from templates stored next to the package lists."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from .classifier import ModuleComponents
from .errors import RenderError
from .logging import get_logger

TEMPLATE_SUFFIX = ".tmpl"
OUTPUT_SUFFIX = ".yaml"


class DocumentEmitter:
    """Renders ``<module>[.<variant>].tmpl`` into ``<module>[.<variant>].yaml``."""

    def __init__(self, base: Path) -> None:
        self.base = base
        self._env = Environment(
            loader=FileSystemLoader(str(base)),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.logger = get_logger("render")

    def has_template(self, module: str, variant: Optional[str] = None) -> bool:
        return (self.base / f"{self._stem(module, variant)}{TEMPLATE_SUFFIX}").is_file()

    def emit(
        self,
        module: str,
        components: ModuleComponents,
        variant: Optional[str] = None,
    ) -> Path:
        stem = self._stem(module, variant)
        template_name = f"{stem}{TEMPLATE_SUFFIX}"
        output_path = self.base / f"{stem}{OUTPUT_SUFFIX}"
        document = {
            "module": module,
            "variant": variant,
            "components": components.as_document(),
        }
        try:
            template = self._env.get_template(template_name)
            rendered = template.render(**document)
        except TemplateError as exc:
            raise RenderError(f"Error while processing {template_name}: {exc}") from exc
        output_path.write_text(rendered, encoding="utf-8")
        self.logger.debug("Wrote %s (%d components)", output_path, len(components.components))
        return output_path

    @staticmethod
    def _stem(module: str, variant: Optional[str]) -> str:
        return f"{module}.{variant}" if variant else module


__all__ = ["DocumentEmitter"]
