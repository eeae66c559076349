"""Configuration: validated settings and project-file loading.

Quick start::

    from provcode.core.config import get_settings

    settings = get_settings()
    print(settings.records_path)     # <root>/records
    print(settings.default_status)   # "proposed"

Architecture::

    settings.py       ProvcodeSettings (pydantic-settings) + get_settings() cache
    loader.py         project root discovery + provcode.yaml loading
"""

from .loader import find_project_file, find_project_root, load_project_file
from .settings import ProvcodeSettings, clear_settings_cache, get_settings

__all__ = [
    "ProvcodeSettings",
    "get_settings",
    "clear_settings_cache",
    "find_project_root",
    "find_project_file",
    "load_project_file",
]
