#!/usr/bin/env python3
"""
Setup script for qa-scaffold.

Install with `pip install .` or `pip install -e ".[dev]"`, then install the
browsers once with `playwright install`.
"""

import sys

if sys.version_info < (3, 11):
    sys.exit("Error: qa-scaffold requires Python 3.11 or higher.")

try:
    from setuptools import find_packages, setup
except ImportError:
    sys.exit("Error: setuptools is required. Install it with: pip install setuptools")

import re
from pathlib import Path

# Read version from __version__.py for consistency
try:
    version_file = Path(__file__).parent / "src" / "qa_scaffold" / "__version__.py"
    version_content = version_file.read_text(encoding="utf-8")
    version_match = re.search(r'^__version__\s*=\s*["\']([^"\']+)["\']', version_content, re.M)
    version = version_match.group(1) if version_match else "0.1.0"
except OSError:
    version = "0.1.0"

# Read long description from README if available
readme_path = Path(__file__).parent / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
    long_description_content_type = "text/markdown"
else:
    long_description = "Starter kit for Playwright end-to-end and HTTP API tests"
    long_description_content_type = "text/plain"

# Core dependencies
install_requires = [
    "playwright>=1.45.0",
    "pydantic>=2.5.0",
    "pydantic-settings>=2.1.0",
    "python-dotenv>=1.0.0",
    "pytest>=8.0.0",
    "pytest-asyncio>=0.24.0",
]

# Development dependencies
extras_require = {
    "dev": [
        "black>=23.0.0",
        "flake8>=6.1.0",
        "mypy>=1.7.0",
        "pytest-cov>=4.1.0",
    ],
}

setup(
    name="qa-scaffold",
    version=version,
    description="Starter kit for Playwright end-to-end and HTTP API tests",
    long_description=long_description,
    long_description_content_type=long_description_content_type,
    author="qa-scaffold contributors",
    license="MIT",
    python_requires=">=3.11",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=install_requires,
    extras_require=extras_require,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Framework :: Pytest",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Testing",
    ],
    keywords=["playwright", "pytest", "e2e", "page-object", "api-testing"],
)
