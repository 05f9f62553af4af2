# setup.py
"""Setup script for the Media Metadata Tool."""

import os

from setuptools import setup, find_packages

setup(
    name="media-metadata-tool",
    version="1.0.0",
    description="Image and video metadata extraction into per-file sidecar records",
    long_description=open("README.md").read() if os.path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Media Tool Team",
    packages=find_packages(include=["media_meta", "media_meta.*"]),
    python_requires=">=3.8",
    install_requires=[
        "Pillow>=8.0.0",
        "numpy>=1.20.0",
        "av>=10.0.0",
        "tqdm>=4.50.0",
    ],
    extras_require={
        "test": [
            "pytest>=6.0.0",
            "pytest-cov>=2.10.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "media-meta=media_meta.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Multimedia :: Graphics",
        "Topic :: Multimedia :: Video",
    ],
)
