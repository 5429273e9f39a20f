from setuptools import setup, find_packages

setup(
    name="uiauto-macos",
    version="1.0.0",
    packages=find_packages(include=["uiauto_macos", "uiauto_macos.*"]),
    install_requires=[
        "pyyaml>=5.4",
        "jsonschema>=4.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "uiauto-macos=uiauto_macos.cli:main",
        ],
    },
)
