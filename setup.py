"""Setup script for Site Audit."""

from setuptools import setup, find_packages

setup(
    name="siteaudit",
    version="1.0.0",
    description="Single-page SEO, performance, accessibility and best-practices auditor",
    author="Site Audit Developers",
    packages=find_packages(include=["siteaudit", "siteaudit.*"]),
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9.0",
        "beautifulsoup4>=4.12.0",
        "click>=8.1.0",
        "rich>=13.6.0",
        "loguru>=0.7.0",
        "fastapi>=0.104.0",
        "uvicorn>=0.24.0",
        "python-multipart>=0.0.6",
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "pydantic-settings>=2.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "httpx>=0.25.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "siteaudit=siteaudit.cli:main",
        ],
    },
    python_requires=">=3.10",
)
