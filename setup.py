#!/usr/bin/env python3
"""
Setup configuration for yt-sync
Keep local folders in sync with YouTube playlists as audio files
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "yt-dlp>=2023.12.30",
    "mutagen>=1.47.0",  # Used by yt-dlp to embed cover art in opus/ogg files
    "click>=8.1.7",
    "tqdm>=4.66.1",
    "colorama>=0.4.6",
    "tomli>=2.0.1",
    "tomli-w>=1.0.0",
]

setup(
    name="yt-sync",
    version="0.3.0",
    author="yt-sync contributors",
    description="Sync YouTube playlists into local folders as audio files with embedded thumbnails",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
    ],
    python_requires=">=3.9",
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
            "yt-sync=yt_sync.main:cli",
        ],
    },
    keywords="youtube playlist sync download audio yt-dlp cli",
)
