# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass

import gi
gi.require_version('Gio', '2.0')
from gi.repository import Gio

from tidynotes.constants import APP_ID, AUTOSAVE_DELAY_MS


@dataclass
class Settings:
    autosave_delay_ms: int = AUTOSAVE_DELAY_MS
    # Allow Tab to nest task items under the previous task.
    nested_tasks: bool = True
    log_level: str = 'INFO'


def _get_gsettings():
    schema_source = Gio.SettingsSchemaSource.get_default()
    if schema_source and schema_source.lookup(APP_ID, True):
        return Gio.Settings.new(APP_ID)
    return None


def load_settings(gsettings=None) -> Settings:
    """Read settings from GSettings; defaults when the schema is not installed."""
    if gsettings is None:
        gsettings = _get_gsettings()
    if gsettings is None:
        return Settings()

    return Settings(
        autosave_delay_ms=gsettings.get_int('autosave-delay-ms') or AUTOSAVE_DELAY_MS,
        nested_tasks=gsettings.get_boolean('nested-tasks'),
        log_level=gsettings.get_string('log-level') or 'INFO',
    )
