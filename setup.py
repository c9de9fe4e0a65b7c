"""
Setup configuration for the Edocument API gate package
"""

from setuptools import setup, find_packages

setup(
    name="edocument-api-gate",
    version="1.0.0",
    description="Edocument API request gate: transport guard and bearer identity resolution",
    author="Edocument",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.104.0",
        "starlette>=0.37.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "pyjwt>=2.8.0",
        "structlog>=23.1.0",
        "uvicorn>=0.24.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "httpx>=0.25.0",
            "black>=23.0.0",
            "mypy>=1.5.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "edocument-gate=edocument_gate.app:main",
        ]
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
