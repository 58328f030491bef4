"""
Setup script for SceneSync

Installation:
    pip install -e .          # Development mode (editable install)
    pip install -e .[test]    # With the test tooling
    pip install .             # Regular install

After installation, run with:
    scenesync --help          # Entry point
    python main.py --help     # Or directly
"""
from setuptools import setup, find_namespace_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).resolve().parent / "README.md"
long_description = ""
if readme_file.exists():
    long_description = readme_file.read_text(encoding="utf-8")

# Read requirements
requirements_file = Path(__file__).resolve().parent / "requirements.txt"
install_requires = []
if requirements_file.exists():
    with open(requirements_file, "r", encoding="utf-8") as f:
        install_requires = [
            line.strip()
            for line in f
            if line.strip() and not line.startswith("#")
        ]

setup(
    name="scenesync",
    version="0.1.0",
    description="Scene planning against an audio track: ordered scenes, keyframes and playback",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="SceneSync",
    author_email="",
    # src is imported as a package (from src.features...), so install it as one
    packages=find_namespace_packages(include=["src", "src.*"]),
    python_requires=">=3.10",
    install_requires=install_requires,
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "scenesync=main:main",
        ],
    },
    py_modules=["main"],  # Include main.py as a module
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Multimedia :: Video",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    include_package_data=True,
)
