#!/usr/bin/env python3
"""
Fetch and build the external dependencies.

Run from the project root (the directory holding ExternalRevisions/):
  python fetch_dependencies.py [--v-headers-root PATH] [--spirv-cross-root PATH]
                               [--glslang-root PATH] [-v]
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
sys.path.insert(0, str(PROJECT_ROOT))

from depsync.cli import main

if __name__ == "__main__":
    sys.exit(main())
