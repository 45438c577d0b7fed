# setup.py
from setuptools import setup, find_packages

setup(
    name="sitemap-audit",
    version="0.1.0",
    description="Асинхронная проверка доступности URL из sitemap и sitemap-индексов",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "aiohttp>=3.10",
        "click>=8.1",
        "lxml>=4.9",
        "pydantic>=2.5",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "sitemap-audit=sitemap_audit.cli:main",
        ],
    },
    python_requires=">=3.11",
)
