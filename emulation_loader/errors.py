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

"""Loader exception hierarchy."""


class LoaderError(Exception):
    """Base loader error."""


class FatalActivationError(LoaderError):
    """Raised when the plugin must not be activated in this environment.

    The host stops the activation request and shows ``message`` to the user.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SingletonMisuseError(LoaderError):
    """Raised when copying, pickling or re-constructing the loader singleton."""


class EntryPointError(LoaderError):
    """Raised when the plugin entry point cannot be resolved."""


class FrameworkError(LoaderError):
    """Raised when a framework class cannot be loaded."""
