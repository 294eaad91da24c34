from setuptools import setup, find_packages

setup(
    name="bond_analyzer",
    version="0.1.0",
    description="Single bond cashflow, yield to maturity and duration calculator",
    packages=find_packages(exclude=["tests"]),
    install_requires=[
        "numpy",
        "pandas",
    ],
    extras_require={
        "test": [
            "pytest",
            "scipy",
        ],
    },
    entry_points={
        "console_scripts": [
            "bond-analyzer=bond_analyzer.cli:main",
        ],
    },
    python_requires=">=3.8",
)
