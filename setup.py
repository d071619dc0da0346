# setup.py
from setuptools import setup, find_packages

setup(
    name="malt",
    version="0.1.0",
    description="A small Lisp interpreter with tail calls, persistent lists and a REPL",
    packages=find_packages(include=["malt", "malt.*"]),
    package_data={"malt": ["prelude/*.malt"]},
    python_requires=">=3.10",
    install_requires=[
        "pyrsistent>=0.19",
    ],
    extras_require={
        "test": ["pytest>=7", "hypothesis>=6"],
    },
    entry_points={
        "console_scripts": ["malt=malt.repl:main"],
    },
    zip_safe=False,
)
