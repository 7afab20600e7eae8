# -*- coding: Utf-8 -*-
# Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine
#
#
"""Declarative configuration registry

Classes declare named settings (defaults, value constructors, nested groups and
optional readers), get a live configuration per class and per instance, and
hand their settings down to subclasses.

This program is free software: you can redistribute it and/or modify it under
the terms of the GNU General Public License as published by the Free Software
Foundation, either version 3 of the License, or (at your option) any later
version.
This program is distributed in the hope that it will be useful, but WITHOUT
ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
You should have received a copy of the GNU General Public License along with
this program. If not, see <http://www.gnu.org/licenses/>.
"""

from __future__ import annotations

__all__ = [
    "AttributeReaderRegistrar",
    "Config",
    "ConfigProperty",
    "Configurable",
    "ConfigurationError",
    "ConstructorError",
    "DSL",
    "DuplicateSettingError",
    "FrozenConfigError",
    "InvalidSettingNameError",
    "NestedBlock",
    "NestedDSL",
    "ReaderRegistrar",
    "ReaderShadowingWarning",
    "Setting",
    "SettingDefinitionError",
    "SettingError",
    "SettingNames",
    "SettingReader",
    "Settings",
    "SettingsCoordinator",
    "UnknownSettingError",
    "check_setting_name",
]

__author__ = "FrankySnow9"
__copyright__ = "Copyright (c) 2021-2022, Francis Clairicia-Rose-Claire-Josephine"
__license__ = "GNU GPL v3.0"
__version__ = "1.0.0"

from loguru import logger

from ._names import SettingNames
from .config import Config
from .configurable import ConfigProperty, Configurable
from .coordinator import SettingsCoordinator
from .dsl import DSL, NestedBlock, NestedDSL
from .exceptions import (
    ConfigurationError,
    ConstructorError,
    DuplicateSettingError,
    FrozenConfigError,
    InvalidSettingNameError,
    ReaderShadowingWarning,
    SettingDefinitionError,
    SettingError,
    UnknownSettingError,
)
from .reader import AttributeReaderRegistrar, ReaderRegistrar, SettingReader
from .setting import Setting, check_setting_name
from .settings import Settings

# Library: stay silent unless the application calls logger.enable("pyconfigurable")
logger.disable(__name__)
