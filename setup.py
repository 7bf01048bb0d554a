"""Setup script for the NBA draft network project."""

from setuptools import find_packages, setup

setup(
    name="nba-draft-network",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "polars>=1.0.0",
        "pyarrow>=13.0.0",
        "pandas>=2.0.0",
        "kedro>=0.19.0",
        "networkx>=3.0",
        "numpy>=1.24.0",
        "matplotlib>=3.7.0",
        "nba_api>=1.4.0",
        "tqdm>=4.65.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.0.265",
        ],
    },
    python_requires=">=3.11",
    description="Teammate networks of NBA draft classes from game logs",
    author="Your Name",
    author_email="your.email@example.com",
)
