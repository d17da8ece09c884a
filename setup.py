from setuptools import find_packages, setup

# Modules to compile
# Only the graph algorithms are compiled; they run on every validation and generation pass.
modules = [
    "infragraph/graph.py",
]

# Check if we are in a build environment that supports compilation
# If mypy is not installed, or we explicitly disable it, we skip compilation.
# This allows 'pip install -e .' to work without compiling during dev.
try:
    from mypyc.build import mypycify

    ext_modules = mypycify(modules)
except (ImportError, RuntimeError):
    # Fallback to pure Python if mypyc is not present or fails
    ext_modules = []

setup(
    name="infragraph",
    version="0.3.0",
    description="Compile cloud resource graphs into validated Terraform configuration",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "pyyaml>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "infragraph=infragraph.cli.main:main",
        ],
    },
    ext_modules=ext_modules,
)
