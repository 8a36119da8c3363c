"""
Setup script for Recordshelf storefront catalog tooling
"""

import sys

try:
    from setuptools import setup, find_packages
except ImportError:
    print("ERROR: setuptools is not installed.")
    print("\nPlease install setuptools first:")
    print("  pip install setuptools")
    print("\nOr better yet, use pip to install this package directly:")
    print("  pip install -e .")
    raise SystemExit(1)

from pathlib import Path

# Read the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

# Check if setup.py is being run without arguments
if len(sys.argv) == 1:
    print("=" * 70)
    print("NOTE: You're running setup.py without any commands.")
    print("=" * 70)
    print("\nThe recommended way to install this package is:")
    print("  pip install -e .")
    print("\n" + "=" * 70)
    sys.exit(0)

setup(
    name="recordshelf",
    version="1.0.0",
    author="Recordshelf Team",
    author_email="contact@example.com",
    description="Scrape a Bandcamp storefront into a static JSON catalog and host its artwork and audio locally",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
    ],
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.25.0",
        "beautifulsoup4>=4.9.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "black>=21.0",
            "flake8>=3.8",
            "mypy>=0.800",
        ],
    },
    entry_points={
        "console_scripts": [
            "recordshelf=recordshelf.main:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
