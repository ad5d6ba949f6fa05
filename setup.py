# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="reckon",
    version="0.1.0",
    description="A small arithmetic and functional expression language",
    packages=find_namespace_packages(include=["reckon", "reckon.*"]),
    python_requires=">=3.11",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
