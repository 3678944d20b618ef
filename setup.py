from setuptools import setup, find_packages


setup(
    name="xorstripe",
    version="0.1",
    packages=find_packages(include=["xorstripe", "xorstripe.*"]),
    description="Single-parity XOR erasure coding: split, protect and recover byte chunks.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.22",
    ],
    entry_points={
        "console_scripts": [
            "xorstripe=xorstripe.cli:main",
        ]
    },
)
