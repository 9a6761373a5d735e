"""Setup script for geminicode-cli."""
from setuptools import setup, find_packages

dependencies = [
    "rich>=13.0.0",
    "prompt-toolkit>=3.0.52",
    "python-dotenv",
]

setup(
    name="geminicode-cli",
    version="0.1.0",
    description="geminicode CLI - persona-driven launcher for gemini-cli",
    license="MIT",
    python_requires=">=3.11,<4.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=dependencies,
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "geminicode=geminicode_cli:cli_main",
        ],
    },
)
