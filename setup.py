"""
Setup script for pdfgraft.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

# Read requirements
requirements = (this_directory / "requirements.txt").read_text(encoding='utf-8').splitlines()

test_requirements = [
    "pytest>=7.0.0",
    "pytest-cov>=4.0.0",
]

setup(
    name="pdfgraft",
    version="0.1.0",
    description="Merge PDF documents by grafting their object graphs and page trees into one document",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="pdfgraft Contributors",
    author_email="",
    packages=find_packages(include=["pdfgraft", "pdfgraft.*"]),
    install_requires=[line for line in requirements if line and not line.startswith("#")],
    extras_require={
        "test": test_requirements,
        "dev": test_requirements,
    },
    entry_points={
        "console_scripts": [
            "pdfgraft=pdfgraft.cli.main:cli",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Office/Business",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf merge page-tree object-graph cli",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
