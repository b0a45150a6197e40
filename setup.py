"""Setup script for tick CLI tool."""

from setuptools import setup

setup(
    name="open-tick-cli",
    version="0.1.0",
    description="Open Tick CLI - Climbing logbook conversion tool",
    author="Open Tick contributors",
    py_modules=["tick"],
    # Library lives under libs/ like the other shared packages
    packages=["open_tick"],
    package_dir={"open_tick": "libs/py-open-tick/open_tick"},
    install_requires=[
        "typer[all]>=0.9.0",
        "rich>=13.0.0",
        "python-dotenv>=1.0.0",
        # Dependencies from py-open-tick
        "pydantic>=2.0.0",
        "python-dateutil>=2.8.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tick=tick:app",
        ],
    },
    python_requires=">=3.11",
)
