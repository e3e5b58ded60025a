"""Packaging for KegelBump.

Install for development:
    pip install -e ".[test]"

Build a macOS .app bundle:
    pip install py2app
    python setup.py py2app
"""

from setuptools import setup

APP = ["main.py"]
DATA_FILES = []
OPTIONS = {
    "argv_emulation": False,
    "iconfile": None,  # Replace with .icns path when a proper icon exists
    "resources": ["kegelbump/resources/SessionConfiguration.json"],
    "plist": {
        "CFBundleName": "KegelBump",
        "CFBundleDisplayName": "KegelBump",
        "CFBundleIdentifier": "com.kegelbump.app",
        "CFBundleVersion": "0.1.0",
        "CFBundleShortVersionString": "0.1.0",
        "NSHighResolutionCapable": True,
        "LSMinimumSystemVersion": "13.0",
    },
}

setup(
    app=APP,
    data_files=DATA_FILES,
    options={"py2app": OPTIONS},
    name="KegelBump",
    version="0.1.0",
    python_requires=">=3.10",
    packages=[
        "kegelbump",
        "kegelbump.session",
        "kegelbump.feedback",
        "kegelbump.ui",
    ],
    package_data={"kegelbump": ["resources/*.json"]},
    install_requires=["PyQt6"],
    extras_require={"test": ["pytest"]},
    entry_points={"gui_scripts": ["kegelbump = kegelbump.__main__:main"]},
)
