# setup.py
from setuptools import setup, find_packages

setup(
    name="equation_fuzzer",
    version="0.1.0",
    description="Randomized search for variable values that make two expressions equal",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "sympy>=1.12",
        "numpy",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "equation-fuzzer = equation_fuzzer.cli:main",
        ],
    },
)
