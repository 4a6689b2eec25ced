"""skel: render directory-tree templates into new projects."""

from skel.config import Config, RenderOptions
from skel.errors import BindingError, ConfigError, FilesystemError, RenderError, SkelError

__version__ = "0.1.0"

__all__ = [
    "BindingError",
    "Config",
    "ConfigError",
    "FilesystemError",
    "RenderError",
    "RenderOptions",
    "SkelError",
]
