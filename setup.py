# setup.py
from setuptools import setup, find_packages

setup(
    name="zest",
    version="0.1.0",
    description="Pratt-parsed expression language with string interpolation and let scopes",
    packages=find_packages(include=["zest", "zest.*"]),
    python_requires=">=3.9",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["zest=zest.__main__:main"],
    },
    zip_safe=False,
)
