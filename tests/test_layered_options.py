import pytest

from bdmodel.layered_options import (
    LAYOUT_OPTIONS,
    SPACING_OPTIONS,
    LayeredOptions,
    instance,
)


def test_layout_defaults():
    options = LayeredOptions()
    assert options.spacing_individual is True
    assert options.unzipping_layer_split is False
    assert options.inside_self_loops is False
    assert options.routing_option == 1
    assert options.layout_direction == 2


def test_spacing_defaults_match_raw_values():
    options = LayeredOptions()
    assert options.node_and_node_h == options.get(SPACING_OPTIONS, "NodeAndNodeH")
    assert options.edge_and_label == options.get(SPACING_OPTIONS, "EdgeAndLabel")
    assert options.label_and_label == 0
    assert options.padding_left == options.padding_right == options.padding_top


def test_get_missing_returns_none():
    options = LayeredOptions()
    assert options.get(LAYOUT_OPTIONS, "NoSuchKey") is None
    assert options.get("NoSuchGroup", "RoutingOption") is None


def test_extra_settings_kept_but_defaults_win():
    options = LayeredOptions({LAYOUT_OPTIONS: {"RoutingOption": 7, "Custom": "abc"}})
    assert options.get(LAYOUT_OPTIONS, "Custom") == "abc"
    assert options.routing_option == LayeredOptions().routing_option


def test_from_ini_reads_extra_keys(tmp_path):
    ini = tmp_path / "LayeredOptions.ini"
    ini.write_text(
        "[SpacingOptions]\nPortAndPort=99\nExtraGap=42\n[Other]\nFlag=true\n",
        encoding="utf-8",
    )
    options = LayeredOptions.from_ini(ini)
    assert options.get(SPACING_OPTIONS, "ExtraGap") == "42"
    assert options.get("Other", "Flag") == "true"
    assert options.port_and_port == LayeredOptions().port_and_port


def test_from_ini_missing_file_warns(tmp_path):
    with pytest.warns(UserWarning, match="was not found"):
        options = LayeredOptions.from_ini(tmp_path / "absent.ini")
    assert options.symbol_and_symbol == LayeredOptions().symbol_and_symbol


def test_instance_is_shared():
    first = instance()
    assert first is instance()
    assert first.layout_direction == LayeredOptions().layout_direction