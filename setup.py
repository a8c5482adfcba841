"""Setup script for the Benin PII scanner."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="benin-pii-scanner",
    version="0.1.0",
    author="PII Scanner Team",
    description="Detection and exposure assessment of Beninese personal data in local files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: System Administrators",
        "Topic :: Security",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "PyMuPDF>=1.23.0",
        "python-docx>=1.1.0",
        "openpyxl>=3.1.0",
        "pydantic>=2.6.0",
        "pydantic-settings>=2.7.0",
        "python-dotenv>=1.0.0",
        "loguru>=0.7.0",
        "rich>=13.7.0",
        "typer>=0.9.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
            "pytest-cov>=4.1.0",
            "black>=24.1.0",
            "ruff>=0.2.0",
            "mypy>=1.8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pii-scanner=pii_scanner.cli.main:app",
        ],
    },
)
