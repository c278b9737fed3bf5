"""Setup script for artup."""

from setuptools import find_packages, setup

setup(
    name="artup-cli",
    version="0.1.0",
    description="Upload files to an artifact repository and record them in build info",
    python_requires=">=3.10",
    packages=find_packages(include=["artup", "artup.*"]),
    install_requires=[
        "click>=8.1",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "dependency-injector>=4.41",
        "tomli>=2.0; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "artup=artup.__main__:main",
        ],
    },
)
