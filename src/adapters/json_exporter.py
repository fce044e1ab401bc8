"""Exportación JSON de resultados.

Por qué JSON:
- Interoperabilidad con scripts y pipelines (jq, notebooks).
- Se usan las claves del API (kebab-case), no los nombres Python.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.common import WireModel


def result_to_json(result: WireModel | dict[str, Any]) -> str:
    payload = result.to_wire() if isinstance(result, WireModel) else result
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def export_result_json(*, result: WireModel | dict[str, Any], output_path: Path) -> Path:
    """Exporta un resultado a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result_to_json(result), encoding="utf-8")
    return output_path
