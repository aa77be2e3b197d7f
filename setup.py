from setuptools import setup, find_packages

setup(
    name="beta-belief",
    version="0.1.0",
    packages=find_packages(include=["beta_belief", "beta_belief.*"]),
    install_requires=[
        "numpy>=1.24",
        "scipy>=1.10",
        "matplotlib>=3.7",
        "click>=8.0.0",
        "pydantic>=2.0.0",
        "PyYAML>=6.0",
        "rich>=10.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "beta-belief=beta_belief.cli.belief_cli:cli",
        ],
    },
)
