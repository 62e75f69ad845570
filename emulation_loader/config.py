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

"""
Loader configuration

Defaults live in ``DEFAULT_CONFIG``. An optional YAML file found next to the
plugin (``emulation_loader.yml``) is merged on top of them.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import yaml

from .compatibility import HOST, PLATFORM, RUNTIME, VersionRequirement
from .versions import is_unknown_version, parse_version

logger = logging.getLogger(__name__)

CONFIG_FILE_NAMES = [
    "emulation_loader.yaml",
    "emulation_loader.yml",
    ".emulation_loader.yaml",
    ".emulation_loader.yml",
]

DEFAULT_CONFIG = {
    "plugin": {
        "id": "authorize-net-emulation-for-woocommerce/authorize-net-emulation-for-woocommerce.php",
        "name": "Authorize.Net Emulation for WooCommerce",
        "version": "1.0.0",
        "documentation_uri": "https://docs.woocommerce.com/document/authorize-net/#emulation-mode",
    },
    # Minimum versions; null disables a requirement
    "requirements": {
        "runtime": "7.0",
        "host": "5.2",
        "platform": "4.0",
    },
    "labels": {
        "runtime": "PHP",
        "host": "WordPress",
        "platform": "WooCommerce",
    },
    "framework": {
        "version": "5.10.4",
        "package": "skyverge_framework",
        "classes": [
            {"name": "SV_WC_Plugin", "module": "woocommerce.class_sv_wc_plugin"},
            {
                "name": "SV_WC_Payment_Gateway_Plugin",
                "module": "woocommerce.payment_gateway.class_sv_wc_payment_gateway_plugin",
            },
        ],
    },
    "entry_point": "authnet_emulation.functions:wc_authorize_net_emulation",
    "links": {
        "host_update_path": "update-core.php",
        "platform_download_url": "https://downloads.wordpress.org/plugin/woocommerce.{version}.zip",
    },
}


def _deep_merge_dict(base: dict, override: dict) -> dict:
    """Recursively merge ``override`` into a copy of ``base``."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def find_config_file(config_dir: Union[str, Path]) -> Optional[Path]:
    directory = Path(config_dir)
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.exists() and candidate.is_file():
            return candidate
    return None


def load_loader_config(location: Union[str, Path, None] = None) -> dict[str, Any]:
    """
    Load the loader configuration.

    Args:
        location: A YAML file, or a directory searched for one of
            ``CONFIG_FILE_NAMES`` (first match wins). None means defaults.

    Returns:
        The defaults with the user configuration merged on top
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not location:
        return config

    path = Path(location)
    config_file = path if path.is_file() else find_config_file(path)
    if config_file is None:
        return config

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            user_config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load loader config from %s: %s", config_file, e)
        return config

    if not isinstance(user_config, dict):
        logger.warning("Ignoring %s: top level must be a mapping", config_file)
        return config

    return _deep_merge_dict(config, user_config)


def _minimum(value: Any, component: str) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        raise ValueError(
            f"Invalid minimum {component} version: {value!r}, write it as a quoted string"
        )
    text = str(value).strip()
    if is_unknown_version(text):
        return None
    if parse_version(text) is None:
        raise ValueError(f"Invalid minimum {component} version: {value!r}")
    return text


@dataclass(frozen=True)
class FrameworkSpec:
    version: str
    package: str
    classes: Tuple[Tuple[str, str], ...]


@dataclass(frozen=True)
class LoaderSettings:
    """Immutable view of the loader configuration."""

    plugin_id: str
    plugin_name: str
    plugin_version: str
    documentation_uri: str
    runtime: VersionRequirement
    host: VersionRequirement
    platform: VersionRequirement
    framework: FrameworkSpec
    entry_point: str
    host_update_path: str
    platform_download_url: str

    @classmethod
    def from_mapping(cls, config: dict[str, Any]) -> "LoaderSettings":
        plugin = config.get("plugin") or {}
        reqs = config.get("requirements") or {}
        labels = config.get("labels") or {}
        fw = config.get("framework") or {}
        links = config.get("links") or {}

        plugin_id = str(plugin.get("id") or "").strip()
        if not plugin_id:
            raise ValueError("Invalid loader config: 'plugin.id' is required")

        classes = []
        for entry in fw.get("classes") or []:
            if not isinstance(entry, dict) or not entry.get("name") or not entry.get("module"):
                raise ValueError(f"Invalid framework class entry: {entry!r}")
            classes.append((str(entry["name"]), str(entry["module"])))

        def requirement(component: str) -> VersionRequirement:
            return VersionRequirement(
                component_name=component,
                minimum_version=_minimum(reqs.get(component), component),
                label=str(labels.get(component) or component),
            )

        return cls(
            plugin_id=plugin_id,
            plugin_name=str(plugin.get("name") or plugin_id),
            plugin_version=str(plugin.get("version") or "0.0.0"),
            documentation_uri=str(plugin.get("documentation_uri") or ""),
            runtime=requirement(RUNTIME),
            host=requirement(HOST),
            platform=requirement(PLATFORM),
            framework=FrameworkSpec(
                version=str(fw.get("version") or ""),
                package=str(fw.get("package") or ""),
                classes=tuple(classes),
            ),
            entry_point=str(config.get("entry_point") or ""),
            host_update_path=str(links.get("host_update_path") or ""),
            platform_download_url=str(links.get("platform_download_url") or ""),
        )


def load_settings(location: Union[str, Path, None] = None) -> LoaderSettings:
    return LoaderSettings.from_mapping(load_loader_config(location))


__all__ = [
    "CONFIG_FILE_NAMES",
    "DEFAULT_CONFIG",
    "FrameworkSpec",
    "LoaderSettings",
    "find_config_file",
    "load_loader_config",
    "load_settings",
]
