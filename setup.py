"""Setup configuration for helm-chart-releaser package.

This module configures the package for distribution, including dependencies,
entry points, and metadata. It reads requirements from requirements.txt if available,
otherwise uses a default set of requirements.

Example:
    To install the package:
        $ pip install .

    To install with test dependencies:
        $ pip install -e ".[test]"

Attributes:
    requirements_file (Path): Path to requirements.txt file
    requirements (list): List of package dependencies
"""

from pathlib import Path
from setuptools import setup, find_packages

requirements_file = Path(__file__).parent / "requirements.txt"
if requirements_file.exists():
    with open(requirements_file, encoding="utf-8") as f:
        requirements = [line for line in f.read().splitlines() if line and not line.startswith("#")]
else:
    # Default requirements if file is not found
    requirements = [
        "click>=8.1",
        "PyYAML>=6.0",
        "GitPython>=3.1.0",
        "PyGithub>=2.4.0",
        "httpx>=0.27",
    ]

setup(
    name="helm_chart_releaser",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=8.0"],
    },
    entry_points={
        "console_scripts": [
            "helm-chart-releaser=helm_chart_releaser.cli:main",
        ],
    },
    python_requires=">=3.10",
    description="Release changed Helm charts to an OCI registry and GitHub releases",
)
