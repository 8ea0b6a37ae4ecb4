"""Setup script for repomix-unpack"""
from setuptools import setup
from pathlib import Path
readme_path = Path(__file__).parent / "README.md"
long_description = readme_path.read_text(encoding="utf-8") if readme_path.exists() else ""
setup(
    name="repomix-unpack",
    version="1.0.0",
    author="Repomix Unpack Project",
    description="Restore a directory tree from a Repomix merged representation file",
    long_description=long_description,
    long_description_content_type="text/markdown",
    py_modules=["repomix_unpack"],
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "progress": ["rich>=10.0.0", "tqdm>=4.60.0"],
        "dev": [
            "pytest>=6.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
            "pytest-asyncio",
            "rich>=10.0.0",
            "tqdm>=4.60.0",
        ],
        "full": ["rich>=10.0.0", "tqdm>=4.60.0"],
    },
    entry_points={
        "console_scripts": [
            "repomix-unpack=repomix_unpack:cli_main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Tools",
        "Topic :: System :: Archiving",
    ],
)
