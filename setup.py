# setup.py
from setuptools import setup, find_packages

setup(
    name="site_warmer",
    version="0.1.0",
    description="Asynchronous crawler that pre-fetches site URLs to warm caches",
    packages=find_packages(include=["site_warmer", "site_warmer.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "soupsieve>=2.5",
        "lxml>=5.0",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-warmer=site_warmer.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
