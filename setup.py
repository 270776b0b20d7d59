"""
Setup script for the growcalc package.

Installation:
    pip install -e .

Or with test tooling:
    pip install -e ".[dev]"
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="growcalc",
    version="0.1.0",
    author="Facility Engineering Tools",
    author_email="engineering@example.com",
    description="Engineering calculations for greenhouse and indoor cultivation facilities",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["growcalc", "growcalc.*"]),
    package_data={"growcalc": ["config.yaml"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Manufacturing",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
    ],
    python_requires=">=3.9",
    install_requires=[
        "typer>=0.9",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "growcalc=growcalc.cli.main:main",
        ],
    },
    keywords=[
        "greenhouse",
        "horticulture",
        "NEC",
        "irrigation",
        "hydraulics",
        "fertigation",
        "energy",
    ],
)
