# setup.py
from setuptools import find_namespace_packages, setup

setup(
    name="component-inventory",
    version="1.0.0",
    description="Static scanner that maps the composition of React UI components",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["component_inventory*"]),
    install_requires=[
        "tree-sitter>=0.23",
        "tree-sitter-typescript>=0.23",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'component-inventory=component_inventory.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
