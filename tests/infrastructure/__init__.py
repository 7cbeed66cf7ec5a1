"""
Unified test infrastructure for Kon.

Modules:
- file_utils: Utilities for creating files and directories
- cli_utils: Running kon.cli as a subprocess
- tree_utils: Shape helpers for expression trees and their dumps
"""

from .file_utils import write
from .cli_utils import run_cli, jload
from .tree_utils import shape_of, shape_of_dump

__all__ = [
    # File utilities
    "write",

    # CLI utilities
    "run_cli", "jload",

    # Tree utilities
    "shape_of", "shape_of_dump",
]
