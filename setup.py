#!/usr/bin/env python3
"""
Setup script for thermokernels

Numerically stable sorting, compensated summation, logsumexp and transition
matrix kernels for free-energy reweighting estimators.
"""

from pathlib import Path

from setuptools import setup, find_packages

# Package metadata
PACKAGE_NAME = "thermokernels"
VERSION = "0.1.0"
DESCRIPTION = "Numerically stable kernels for WHAM/dTRAM/MBAR reweighting estimators"
AUTHOR = "thermokernels contributors"
LICENSE = "LGPL-3.0-or-later"

# Read long description from README
def read_readme():
    readme_path = Path(__file__).parent / "README.md"
    if readme_path.exists():
        with open(readme_path, "r", encoding="utf-8") as f:
            return f.read()
    return DESCRIPTION

# Package requirements
def get_requirements():
    """Get package requirements."""
    base_requirements = [
        "numpy>=1.19.0",
        "torch>=1.9.0",
    ]
    
    dev_requirements = [
        "pytest>=6.0",
        "pytest-cov>=2.0",
    ]
    
    return {
        "base": base_requirements,
        "dev": dev_requirements,
    }

# Setup configuration
def main():
    """Main setup function."""
    requirements = get_requirements()
    
    setup(
        name=PACKAGE_NAME,
        version=VERSION,
        description=DESCRIPTION,
        long_description=read_readme(),
        long_description_content_type="text/markdown",
        author=AUTHOR,
        license=LICENSE,
        
        # Package configuration
        packages=find_packages(include=["thermokernels", "thermokernels.*"]),
        
        # Dependencies
        install_requires=requirements["base"],
        extras_require={
            "dev": requirements["dev"],
            "test": requirements["dev"],
        },
        python_requires=">=3.8",
        zip_safe=True,
        
        # Metadata for PyPI
        classifiers=[
            "Development Status :: 4 - Beta",
            "Intended Audience :: Science/Research",
            "License :: OSI Approved :: GNU Lesser General Public License v3 or later (LGPLv3+)",
            "Programming Language :: Python :: 3",
            "Topic :: Scientific/Engineering :: Chemistry",
            "Topic :: Scientific/Engineering :: Physics",
            "Operating System :: OS Independent",
        ],
        keywords=[
            "wham", "dtram", "mbar", "logsumexp", "kahan",
            "free-energy", "molecular-dynamics", "transition-matrix"
        ],
    )

if __name__ == "__main__":
    main()
