"""Render the registry document as YAML or JSON"""
import json
import yaml
from typing import Any, Dict
from models.registry_models import ExportDocument

FORMATS = ("yaml", "json")


def document_to_dict(document: ExportDocument) -> Dict[str, Any]:
    """Plain mapping of the document with empty fields left out"""
    return document.model_dump(mode="json", by_alias=True, exclude_defaults=True)


def render_document(document: ExportDocument, fmt: str = "yaml") -> str:
    """Serialize the document, keeping field order"""
    data = document_to_dict(document)
    if fmt == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    elif fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    else:
        raise ValueError(f"Unsupported output format: {fmt}")
