#!/usr/bin/env python
from setuptools import setup, find_packages

setup(
    name="probrng",
    version="0.1.0",
    description="Inverse-transform sampling of continuous distributions with a bisection CDF inverter",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",

    # picks up probrng/ and probrng/core/, but not tests
    packages=find_packages(exclude=["tests*", "docs*", "notebooks*"]),

    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.20",
        "scipy>=1.7",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "flake8",
        ],
    },
    entry_points={
        "console_scripts": [
            "probrng=probrng.cli:main",
        ],
    },

    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],

    include_package_data=False,
)
