from typing import Final

from ..assets import AssetTable
from .data import RESOURCES, TEMPLATES

_BUNDLE: Final = AssetTable(RESOURCES)


def get_resource_str(resource_name: str) -> str | None:
    if resource_name in _BUNDLE:
        return _BUNDLE.resolve_text(resource_name)
    return None


def get_template_str(template_name: str) -> str | None:
    if t := TEMPLATES.get(template_name):
        return get_resource_str(t)
    return None
