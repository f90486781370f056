#!/usr/bin/env python3
"""
Setup configuration for spotify-web
Typed Spotify Web API object model, JSON converters and OAuth2 flows
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "requests>=2.31.0",
    "click>=8.1.7",
    "pyyaml>=6.0.1",
    "colorama>=0.4.6",
    "python-dotenv>=1.0.0",
]

setup(
    name="spotify-web",
    version="0.1.0",
    author="spotify-web contributors",
    description="Typed Spotify Web API object model with JSON converters and OAuth2 authorization flows",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "spotify-web=spotify_web.cli:main",
        ],
    },
    keywords="spotify web api oauth2 json client",
)
