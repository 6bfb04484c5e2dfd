# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="hierselect",
    version="0.1.0",
    description="Sparse tri-state hierarchy selection trees and hierarchy identity filters",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["hierselect", "hierselect.*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'hierselect=hierselect.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
