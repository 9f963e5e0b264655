"""
Root pytest configuration and shared fixtures.

This file contains configuration and fixtures shared across all test types.
Directory-specific conftest.py files can override or extend these fixtures.
"""

import sys
from pathlib import Path

# Make "services.*" and the backend's top-level modules ("app", "utils", ...)
# importable without installing the project
project_root = Path(__file__).resolve().parent.parent
for path in (project_root, project_root / "backend"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
