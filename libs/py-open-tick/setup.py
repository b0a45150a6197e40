"""Setup configuration for open-tick."""

from setuptools import setup, find_packages

setup(
    name="open-tick",
    version="0.1.0",
    description="Canonical tick conversion for climbing logbook exports",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.11",
    install_requires=[
        "pydantic>=2.0.0",
        "python-dateutil>=2.8.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    author="Open Tick contributors",
    license="MIT",
)
