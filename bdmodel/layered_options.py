"""Settings for the layered layout algorithm."""

from __future__ import annotations

import configparser
import warnings
from functools import lru_cache
from os import PathLike
from pathlib import Path
from typing import Any, Callable, Mapping

__all__ = [
    "LAYOUT_OPTIONS",
    "SPACING_OPTIONS",
    "LayeredOptions",
    "instance",
]

LAYOUT_OPTIONS = "LayoutOptions"
SPACING_OPTIONS = "SpacingOptions"

_DEFAULTS: dict[str, dict[str, Any]] = {
    LAYOUT_OPTIONS: {
        "SpacingIndividual": True,
        "UnzippingLayerSplit": False,
        "RoutingOption": 1,  # 1: orthogonal routing
        "LayoutDirection": 2,  # 1: up, 2: right, 3: down, 4: left
        "InsideSelfLoops": False,
    },
    SPACING_OPTIONS: {
        "TextAndNode": 10,
        "TextAndText": 10,
        "ComponentAndComponent": 20,
        "EdgeAndEdgeH": 10,
        "EdgeAndEdgeV": 10,
        "EdgeAndEdge": 10,
        "EdgeAndLabel": 2,
        "EdgeAndNodeH": 10,
        "EdgeAndNodeV": 10,
        "LabelAndLabel": 0,
        "LabelAndPortH": 2,
        "LabelAndPortV": 2,
        "NodeAndLabel": 5,
        "NodeAndNodeH": 20,
        "NodeAndNodeV": 20,
        "NodeSelfLoop": 10,
        "PortAndPort": 5,
        "SymbolAndSymbol": 20,
        "PaddingTop": 10,
        "PaddingBottom": 10,
        "PaddingLeft": 10,
        "PaddingRight": 10,
        "AdditionalPortSpaceTop": 2,
        "AdditionalPortSpaceBottom": 2,
        "AdditionalPortSpaceLeft": 2,
        "AdditionalPortSpaceRight": 2,
    },
}


def _to_bool(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


def _to_uint(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            return 0
    else:
        number = int(value)
    return number if 0 <= number <= 0xFFFFFFFF else 0


class _Option:
    """Read-only view of one setting, converted to its type."""

    def __init__(self, group: str, key: str, convert: Callable[[Any], Any]) -> None:
        self.group = group
        self.key = key
        self._convert = convert

    def __get__(self, obj: "LayeredOptions | None", owner: type) -> Any:
        if obj is None:
            return self
        return self._convert(obj.get(self.group, self.key))


class LayeredOptions:
    """Grouped layout settings.

    Extra settings may be supplied, but the built-in defaults always take
    precedence for the keys they define.
    """

    def __init__(self, extra: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        self._settings: dict[str, dict[str, Any]] = {}
        for group, values in (extra or {}).items():
            self._settings.setdefault(group, {}).update(values)
        for group, values in _DEFAULTS.items():
            self._settings.setdefault(group, {}).update(values)

    @classmethod
    def from_ini(cls, path: "str | PathLike[str]") -> "LayeredOptions":
        """Build options from an INI file; a missing file leaves only defaults."""
        file_path = Path(path)
        if not file_path.exists():
            warnings.warn(
                f"The config file '{file_path.name}' was not found.", stacklevel=2
            )
            return cls()
        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str  # type: ignore[assignment]
        parser.read(file_path, encoding="utf-8")
        extra = {section: dict(parser.items(section)) for section in parser.sections()}
        return cls(extra)

    def get(self, group: str, key: str) -> Any:
        """The raw value of a setting, or None when it is not set."""
        return self._settings.get(group, {}).get(key)

    spacing_individual = _Option(LAYOUT_OPTIONS, "SpacingIndividual", _to_bool)
    unzipping_layer_split = _Option(LAYOUT_OPTIONS, "UnzippingLayerSplit", _to_bool)
    routing_option = _Option(LAYOUT_OPTIONS, "RoutingOption", _to_uint)
    layout_direction = _Option(LAYOUT_OPTIONS, "LayoutDirection", _to_uint)
    inside_self_loops = _Option(LAYOUT_OPTIONS, "InsideSelfLoops", _to_bool)

    text_and_node = _Option(SPACING_OPTIONS, "TextAndNode", _to_uint)
    text_and_text = _Option(SPACING_OPTIONS, "TextAndText", _to_uint)
    component_and_component = _Option(SPACING_OPTIONS, "ComponentAndComponent", _to_uint)
    edge_and_edge_h = _Option(SPACING_OPTIONS, "EdgeAndEdgeH", _to_uint)
    edge_and_edge_v = _Option(SPACING_OPTIONS, "EdgeAndEdgeV", _to_uint)
    edge_and_edge = _Option(SPACING_OPTIONS, "EdgeAndEdge", _to_uint)
    edge_and_label = _Option(SPACING_OPTIONS, "EdgeAndLabel", _to_uint)
    edge_and_node_h = _Option(SPACING_OPTIONS, "EdgeAndNodeH", _to_uint)
    edge_and_node_v = _Option(SPACING_OPTIONS, "EdgeAndNodeV", _to_uint)
    label_and_label = _Option(SPACING_OPTIONS, "LabelAndLabel", _to_uint)
    label_and_port_h = _Option(SPACING_OPTIONS, "LabelAndPortH", _to_uint)
    label_and_port_v = _Option(SPACING_OPTIONS, "LabelAndPortV", _to_uint)
    node_and_label = _Option(SPACING_OPTIONS, "NodeAndLabel", _to_uint)
    node_and_node_h = _Option(SPACING_OPTIONS, "NodeAndNodeH", _to_uint)
    node_and_node_v = _Option(SPACING_OPTIONS, "NodeAndNodeV", _to_uint)
    node_self_loop = _Option(SPACING_OPTIONS, "NodeSelfLoop", _to_uint)
    port_and_port = _Option(SPACING_OPTIONS, "PortAndPort", _to_uint)
    symbol_and_symbol = _Option(SPACING_OPTIONS, "SymbolAndSymbol", _to_uint)
    padding_top = _Option(SPACING_OPTIONS, "PaddingTop", _to_uint)
    padding_bottom = _Option(SPACING_OPTIONS, "PaddingBottom", _to_uint)
    padding_left = _Option(SPACING_OPTIONS, "PaddingLeft", _to_uint)
    padding_right = _Option(SPACING_OPTIONS, "PaddingRight", _to_uint)
    additional_port_space_top = _Option(SPACING_OPTIONS, "AdditionalPortSpaceTop", _to_uint)
    additional_port_space_bottom = _Option(
        SPACING_OPTIONS, "AdditionalPortSpaceBottom", _to_uint
    )
    additional_port_space_left = _Option(
        SPACING_OPTIONS, "AdditionalPortSpaceLeft", _to_uint
    )
    additional_port_space_right = _Option(
        SPACING_OPTIONS, "AdditionalPortSpaceRight", _to_uint
    )


@lru_cache(maxsize=None)
def instance() -> LayeredOptions:
    """The shared options object."""
    return LayeredOptions()