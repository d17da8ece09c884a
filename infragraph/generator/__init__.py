from .generator import ConfigurationGenerator, category_filename, write_files
from .hcl import render_block, render_blocks, render_value

__all__ = [
    "ConfigurationGenerator",
    "category_filename",
    "render_block",
    "render_blocks",
    "render_value",
    "write_files",
]
