"""
Top-level pytest configuration.

Registers the qa-scaffold fixtures for every test under this directory.
"""

import os
import sys

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

pytest_plugins = [
    "pytester",
    "qa_scaffold.fixtures",
]
