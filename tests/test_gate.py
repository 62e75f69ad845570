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

"""Tests for emulation_loader.gate - activation and per-request checks."""

import pytest

from emulation_loader import ActivationGate, EnvironmentSnapshot, GateState, SimulatedHost
from emulation_loader.errors import FatalActivationError
from emulation_loader.gate import (
    BAD_ENVIRONMENT_NOTICE,
    UPDATE_HOST_NOTICE,
    UPDATE_PLATFORM_NOTICE,
)
from emulation_loader.notices import NoticeSeverity


def _gate(settings, runtime="7.4", host_version="5.8", platform_version="5.0"):
    host = SimulatedHost(EnvironmentSnapshot(runtime, host_version, platform_version))
    return ActivationGate(host, settings), host


def test_activation_refused_below_runtime_minimum(settings) -> None:
    gate, host = _gate(settings, runtime="6.4", host_version="5.2", platform_version="4.0")

    with pytest.raises(FatalActivationError) as exc_info:
        gate.on_activation_attempt()

    message = exc_info.value.message
    assert "could not be activated" in message
    assert "7.0" in message
    assert "6.4" in message
    assert gate.state == GateState.DEACTIVATED
    assert not host.is_plugin_active(settings.plugin_id)


def test_activation_accepted(settings) -> None:
    gate, _ = _gate(settings)
    gate.on_activation_attempt()
    assert gate.state == GateState.ACTIVATED


def test_environment_message(settings) -> None:
    gate, _ = _gate(settings, runtime="6.4")
    assert gate.environment_message() == (
        "The minimum PHP version required for this plugin is 7.0. You are running 6.4."
    )


def test_environment_message_unknown_runtime(settings) -> None:
    gate, _ = _gate(settings, runtime=None)
    assert gate.environment_message().endswith("You are running unknown.")


def test_drift_deactivates_active_plugin(settings) -> None:
    gate, host = _gate(settings)
    host.active_plugins.add(settings.plugin_id)
    host.activation_notice_visible = True
    gate.on_every_request_check()
    assert host.is_plugin_active(settings.plugin_id)

    host.update_environment(runtime_version="5.6")
    gate.on_every_request_check()
    gate.on_every_request_check()

    assert not host.is_plugin_active(settings.plugin_id)
    assert host.activation_notice_visible is False
    assert gate.state == GateState.DEACTIVATED
    notices = gate.notices.drain_and_render()
    assert [n.key for n in notices] == [BAD_ENVIRONMENT_NOTICE]
    assert notices[0].severity is NoticeSeverity.ERROR
    assert "has been deactivated" in notices[0].message


def test_drift_ignored_when_plugin_inactive(settings) -> None:
    gate, host = _gate(settings, runtime="5.6")
    gate.on_every_request_check()
    assert len(gate.notices) == 0


def test_old_host_adds_advisory_notice_only(settings) -> None:
    gate, host = _gate(settings, host_version="5.0", platform_version="4.0")
    host.active_plugins.add(settings.plugin_id)

    gate.on_every_request_check()
    gate.add_plugin_notices()

    assert host.is_plugin_active(settings.plugin_id)
    assert gate.plugins_compatible() is False
    notices = gate.notices.drain_and_render()
    assert [n.key for n in notices] == [UPDATE_HOST_NOTICE]
    assert "requires WordPress version 5.2 or higher" in notices[0].message
    assert 'href="http://localhost/wp-admin/update-core.php"' in notices[0].message


def test_missing_platform_adds_download_link(settings) -> None:
    gate, _ = _gate(settings, platform_version=None)
    gate.add_plugin_notices()
    notice = gate.notices.get(UPDATE_PLATFORM_NOTICE)
    assert notice is not None
    assert "https://downloads.wordpress.org/plugin/woocommerce.4.0.zip" in notice.message
    assert gate.plugins_compatible() is False


def test_plugins_compatible_ignores_runtime(settings) -> None:
    gate, _ = _gate(settings, runtime="5.6")
    assert gate.is_environment_compatible() is False
    assert gate.plugins_compatible() is True


def test_begin_request_discards_previous_notices(settings) -> None:
    gate, _ = _gate(settings, host_version="5.0")
    gate.add_plugin_notices()
    assert len(gate.notices) == 1
    gate.begin_request()
    assert len(gate.notices) == 0


def test_output_notices_escapes_versions(settings) -> None:
    gate, host = _gate(settings, runtime="<b>6</b>")
    host.active_plugins.add(settings.plugin_id)
    gate.on_every_request_check()
    html = gate.output_notices()
    assert html.startswith('<div class="error"><p>')
    assert "&lt;b&gt;6&lt;/b&gt;" in html
