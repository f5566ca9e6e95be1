"""Quick CSV command line tool."""

from quick_csv.settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
