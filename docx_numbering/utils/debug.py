"""Helpers to persist the numbering catalog as JSON for debugging."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from docx_numbering.model.numbering_model import NumberingCatalog


class DebugDumper:
    """Writes intermediate artifacts onto disk for inspection."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def dump(self, catalog: NumberingCatalog) -> Path:
        """Persist the instance -> template bindings as JSON for offline analysis."""
        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.directory / "numbering_catalog.json"
        target.write_text(json.dumps(self._serialize(catalog), indent=2))
        return target

    def _serialize(self, catalog: NumberingCatalog) -> Dict[str, Any]:
        return {
            "templates": [
                {
                    "template_id": template.template_id,
                    "style_kind": template.style_kind.value if template.style_kind else None,
                    "name": template.name,
                    "levels": {
                        str(index): {"format": level.num_format, "text": level.level_text, "start": level.start}
                        for index, level in sorted(template.levels.items())
                    },
                }
                for template in catalog.templates
            ],
            "instances": [
                {
                    "instance_id": instance.instance_id,
                    "template_id": instance.template_id,
                    "resolved": template is not None,
                    "start_overrides": {
                        str(index): override.start_override for index, override in sorted(instance.overrides.items())
                    },
                }
                for instance, template in catalog.iter_bindings()
            ],
        }
