import argparse

import pytest

from nfc_checklists.config import DEFAULT_CONFIG, load_config, merge_config
from nfc_checklists.errors import InputFormatError


def test_defaults_without_file():
    config = load_config()
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_yaml_overrides_are_merged_per_key(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text(
        "location:\n"
        "  name: Hilltop\n"
        "  latitude: '44.1'\n"
        "paths:\n"
        "  export: out/hilltop.csv\n"
    )
    config = load_config(path)

    assert config['location']['name'] == 'Hilltop'
    assert config['location']['latitude'] == '44.1'
    assert config['location']['state'] == DEFAULT_CONFIG['location']['state']
    assert config['paths']['export'] == 'out/hilltop.csv'
    assert config['paths']['codes'] == DEFAULT_CONFIG['paths']['codes']
    # defaults are never modified
    assert DEFAULT_CONFIG['location']['name'] == 'Monsignor Crosby Ave (Yard)'


def test_cli_output_overrides_file(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("paths:\n  export: from_file.csv\n")
    args = argparse.Namespace(output='from_cli.csv')
    assert load_config(path, args)['paths']['export'] == 'from_cli.csv'


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("")
    assert load_config(path) == DEFAULT_CONFIG


def test_missing_file_is_an_error(tmp_path):
    with pytest.raises(InputFormatError):
        load_config(tmp_path / 'nope.yaml')


def test_non_mapping_is_an_error(tmp_path):
    path = tmp_path / 'config.yaml'
    path.write_text("- just\n- a list\n")
    with pytest.raises(InputFormatError):
        load_config(path)


def test_merge_config_replaces_scalars_and_keeps_siblings():
    merged = merge_config({'a': {'b': 1, 'c': 2}, 'd': 3}, {'a': {'b': 10}, 'd': {'e': 4}})
    assert merged == {'a': {'b': 10, 'c': 2}, 'd': {'e': 4}}
