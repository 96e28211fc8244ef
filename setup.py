# setup.py
from setuptools import setup, find_packages

setup(
    name="custodycompass",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "python-dateutil",
        "matplotlib",
    ],
    extras_require={
        "test": [
            "pytest",
            "freezegun",
        ],
    },
    entry_points={
        "console_scripts": [
            "custodycompass=custodycompass.main:run",
        ],
    },
)
