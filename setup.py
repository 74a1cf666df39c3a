#!/usr/bin/env python3
"""
RCache Setup Script
===================
Allows installation of the rcache package.

Usage:
    pip install -e .           # Development install
    pip install -e ".[test]"   # Development install with test tools
    pip install .              # Regular install
"""

from setuptools import setup, find_packages

setup(
    name="rcache",
    version="1.0.0",
    description="Grouped hash-map cache with structured keys and group TTL for Redis",
    packages=find_packages(include=["rcache", "rcache.*"]),
    python_requires=">=3.10",
    install_requires=[
        "redis>=5.0.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
)
