"""Minimal setup.py for petersburg_paradox package."""

import os
from pathlib import Path

from setuptools import find_packages, setup

# Read the version from _version.py
__version__ = ""
exec(open(os.path.join("petersburg_paradox", "_version.py")).read())

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="petersburg_paradox",
    version=__version__,
    description="Monte Carlo simulation of the St. Petersburg paradox sample-mean distribution",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["petersburg_paradox", "petersburg_paradox.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Mathematics",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.26",
        "pandas>=2.1",
        "pydantic>=2.5",
        "pyyaml>=6.0.1",
        "scipy>=1.11",
        "tqdm>=4.66",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0",
            "pytest-cov>=4.1",
            "pylint>=3.0",
            "black>=24.1",
            "mypy>=1.8",
            "isort>=5.13",
            "types-PyYAML>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "petersburg-paradox=petersburg_paradox.cli:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
