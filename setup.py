from setuptools import setup, find_packages

setup(
    name="samanage-client",
    version="0.1.0",
    description="Async client for the Samanage IT service management API",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "httpx>=0.25.1",
        "pydantic>=2.4.2",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",
        "typer>=0.9.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "isort>=5.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "samanage=samanage.cli:main",
        ],
    },
)
