# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="compendium",
    version="1.0.0",
    description="Compiles numbered CommonMark text documents into a navigable HTML site",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["compendium*"]),
    python_requires=">=3.9",
    install_requires=[
        "beautifulsoup4",   # Pretty-printing of the generated navigation markup
        "markdown-it-py",   # CommonMark to HTML conversion
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'compendium=compendium.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
