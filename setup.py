# setup.py
from setuptools import setup, find_packages

setup(
    name="play_scout",
    version="0.1.0",
    description="Async scraper of app store catalog pages: apps, lists and search",
    packages=find_packages(include=["play_scout", "play_scout.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "click>=8.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["play-scout=play_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
