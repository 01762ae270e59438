# SPDX-License-Identifier: MIT
# Copyright (c) 2025 mongo-store contributors

"""Setup configuration for mongo-store package."""

from pathlib import Path

from setuptools import find_packages, setup

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="mongo-store",
    version="0.1.0",
    author="mongo-store contributors",
    description="MongoDB CRUD store adapter for microservice hosts",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["mongo_store", "mongo_store.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "pymongo>=4.6.3",  # MongoDB client, ships bson
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pylint>=3.0.0",
            "mypy>=1.0.0",
        ],
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
)
