"""Settings snapshot package.

Typed catalog and snapshot models (schema, catalog), store backends (storage)
and snapshot export / import with merge policies (export_import).
"""

from .catalog import SettingsCatalog, SettingsPage, load_catalog
from .schema import MERGE_MODES, MergeMode, SettingDefinition
from .storage import MISSING, DbSettingsStore, MemorySettingsStore, SettingsStore
from .export_import import (
    InvalidSettingsFile,
    SettingApplyError,
    apply_settings,
    export_filename,
    export_settings,
    export_settings_simple,
    export_settings_verbose,
    extract_settings,
    import_result_message,
    import_settings,
    parse_merge_mode,
    render_settings_json,
)

__all__ = [
    "SettingsCatalog",
    "SettingsPage",
    "SettingDefinition",
    "load_catalog",
    "MERGE_MODES",
    "MergeMode",
    "MISSING",
    "SettingsStore",
    "MemorySettingsStore",
    "DbSettingsStore",
    "InvalidSettingsFile",
    "SettingApplyError",
    "apply_settings",
    "export_filename",
    "export_settings",
    "export_settings_simple",
    "export_settings_verbose",
    "extract_settings",
    "import_result_message",
    "import_settings",
    "parse_merge_mode",
    "render_settings_json",
]
