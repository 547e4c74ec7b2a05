# setup.py
from setuptools import setup, find_packages

setup(
    name="stamplog",
    version="0.1.0",
    description="Leveled console and file logging with timestamped size-based rotation",
    package_dir={"": "src"},
    packages=find_packages(where="src"),  # Picks up 'stamplog' and its subpackages
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": ["pytest<9"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
