#!/usr/bin/env python3
"""Setup script for fuzzy_select package.
"""

from setuptools import find_packages, setup

setup(
    name="fuzzy-select",
    version="1.0.0",
    description="Fuzzy string scoring and top-K / best-match candidate selection",
    author="fuzzy-select Team",
    packages=find_packages(include=["fuzzy_select*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.22.0",
        "pandas>=1.5.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "pytest-benchmark>=4.0.0",
            "rapidfuzz>=3.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "hypothesis>=6.0.0",
            "pytest-benchmark>=4.0.0",
            "rapidfuzz>=3.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "pandas-stubs>=2.0.0",
            "types-PyYAML>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fuzzy-select=fuzzy_select.cli:main",
        ],
    },
)
