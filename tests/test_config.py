# SPDX-License-Identifier: Apache-2.0
# Copyright 2026 Ague Samuel Amen
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for emulation_loader.config - YAML configuration handling."""

from pathlib import Path

import pytest
import yaml

from emulation_loader.config import (
    DEFAULT_CONFIG,
    LoaderSettings,
    find_config_file,
    load_loader_config,
    load_settings,
)


def _write_yaml(path: Path, data) -> Path:
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f)
    return path


def test_defaults_when_missing(tmp_path: Path) -> None:
    cfg = load_loader_config(str(tmp_path))
    assert cfg == DEFAULT_CONFIG
    assert cfg is not DEFAULT_CONFIG


def test_default_settings() -> None:
    settings = load_settings()
    assert settings.plugin_name == "Authorize.Net Emulation for WooCommerce"
    assert settings.runtime.minimum_version == "7.0"
    assert settings.runtime.label == "PHP"
    assert settings.host.minimum_version == "5.2"
    assert settings.platform.minimum_version == "4.0"
    assert settings.framework.version == "5.10.4"
    assert len(settings.framework.classes) == 2


def test_user_config_is_merged(tmp_path: Path) -> None:
    _write_yaml(
        tmp_path / "emulation_loader.yml",
        {"requirements": {"host": "6.0"}, "labels": {"runtime": "Python"}},
    )
    settings = load_settings(tmp_path)
    assert settings.host.minimum_version == "6.0"
    assert settings.runtime.minimum_version == "7.0"
    assert settings.runtime.label == "Python"
    assert settings.platform.label == "WooCommerce"


def test_candidate_priority(tmp_path: Path) -> None:
    _write_yaml(tmp_path / ".emulation_loader.yml", {})
    _write_yaml(tmp_path / "emulation_loader.yaml", {})
    assert find_config_file(tmp_path).name == "emulation_loader.yaml"


def test_explicit_file(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "custom.yml", {"requirements": {"runtime": "8.1"}})
    assert load_settings(path).runtime.minimum_version == "8.1"


def test_null_requirement_disables_it(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "emulation_loader.yml", {"requirements": {"platform": None}})
    settings = load_settings(tmp_path)
    assert settings.platform.minimum_version is None
    assert settings.platform.enabled is False


def test_invalid_yaml_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / "emulation_loader.yml").write_text("requirements: [unclosed", encoding="utf-8")
    assert load_loader_config(tmp_path) == DEFAULT_CONFIG


def test_non_mapping_falls_back_to_defaults(tmp_path: Path) -> None:
    _write_yaml(tmp_path / "emulation_loader.yml", ["a", "b"])
    assert load_loader_config(tmp_path) == DEFAULT_CONFIG


def test_malformed_minimum_rejected() -> None:
    cfg = load_loader_config()
    cfg["requirements"]["runtime"] = "seven"
    with pytest.raises(ValueError):
        LoaderSettings.from_mapping(cfg)


def test_missing_plugin_id_rejected() -> None:
    cfg = load_loader_config()
    cfg["plugin"]["id"] = ""
    with pytest.raises(ValueError):
        LoaderSettings.from_mapping(cfg)


def test_settings_are_immutable() -> None:
    settings = load_settings()
    with pytest.raises(AttributeError):
        settings.plugin_id = "other"


def test_unquoted_float_minimum_rejected(tmp_path: Path) -> None:
    (tmp_path / "emulation_loader.yml").write_text(
        "requirements:\n  runtime: 7.10\n", encoding="utf-8"
    )
    with pytest.raises(ValueError, match="quoted string"):
        load_settings(tmp_path)


def test_integer_minimum_accepted() -> None:
    cfg = load_loader_config()
    cfg["requirements"]["runtime"] = 8
    assert LoaderSettings.from_mapping(cfg).runtime.minimum_version == "8"


def test_boolean_minimum_rejected() -> None:
    cfg = load_loader_config()
    cfg["requirements"]["host"] = True
    with pytest.raises(ValueError):
        LoaderSettings.from_mapping(cfg)
