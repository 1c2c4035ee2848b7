"""
logix-vfs - Setup Configuration

Confined, read-only filesystem access with a real-directory backend and an
in-memory backend for deterministic tests.

License: MIT
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

# Core dependencies
core_deps = [
    # Configuration
    "pydantic>=2.11.9",
    "pyyaml>=6.0.2",
    # CLI
    "click>=8.1.7",
    "rich>=14.1.0",
]

# Development dependencies
dev_deps = [
    # Testing
    "pytest>=8.4.1",
    "pytest-cov>=6.2.1",
    # Code quality
    "black>=25.0.0",
    "flake8>=7.1.0",
    "mypy>=1.13.0",
]

setup(
    name="logix-vfs",
    version="0.1.0",

    # Package description
    description="Sandboxed, backend-agnostic read-only filesystem access confined to a root directory",
    long_description=long_description,
    long_description_content_type="text/markdown",

    # Package discovery
    packages=find_packages(where="src"),
    package_dir={"": "src"},

    # Python version requirement
    python_requires=">=3.9",

    # Dependencies
    install_requires=core_deps,

    # Optional dependencies (extras)
    extras_require={
        "test": ["pytest>=8.4.1", "pytest-cov>=6.2.1"],
        "dev": dev_deps,
    },

    # PyPI classifiers
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Topic :: System :: Filesystems",
    ],

    keywords=["vfs", "filesystem", "sandbox", "jail", "path", "in-memory"],

    license="MIT",

    # Entry points
    entry_points={
        "console_scripts": [
            "logix-vfs=logix_vfs.cli:main",
        ],
    },

    include_package_data=True,
    zip_safe=False,
)
