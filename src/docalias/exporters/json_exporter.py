"""JSON exporter for resolved doclets."""

from pathlib import Path
import json
from typing import Any, Dict, List, Optional

from docalias.models import Doclet
from docalias.resolution import FileRegistry


class JSONExporter:
    """Export rewritten doclets and the resolution report to JSON."""

    def export(
        self,
        doclets: List[Doclet],
        registry: FileRegistry,
        output_path: Path,
        stats: Optional[Dict[str, Any]] = None
    ) -> None:
        """Export doclets and per-file resolution state to a JSON file."""
        data = {
            "metadata": {
                "total_doclets": len(doclets),
                **registry.get_stats(),
                **(stats or {})
            },
            "files": {
                info.filename: info.to_dict() for info in registry
            },
            "doclets": [doclet.to_dict() for doclet in doclets]
        }

        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(data, f, indent=2, default=str)
