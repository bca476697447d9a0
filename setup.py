"""
Setup script for the turnflow package with optional Cython compilation.

This builds the internal engines (_alerts, _match, _router) as compiled
extensions when TURNFLOW_BUILD_EXT=1 and Cython is installed, while
keeping the public API (session.py, platform.py, presenter.py, errors.py)
as readable Python source.
"""

from setuptools import setup, find_packages, Extension
import glob
import os

USE_CYTHON = os.environ.get("TURNFLOW_BUILD_EXT", "").lower() in ("1", "true", "yes")

if USE_CYTHON:
    from Cython.Build import cythonize

# Internal modules to compile with Cython
CYTHON_PATTERNS = [
    "src/turnflow/_alerts/*.py",
    "src/turnflow/_match/*.py",
    "src/turnflow/_router/*.py",
    "src/turnflow/_router/handlers/*.py",
]


def get_extensions():
    """Build Extension objects for Cython compilation."""
    extensions = []
    for pattern in CYTHON_PATTERNS:
        for module_path in sorted(glob.glob(pattern)):
            if module_path.endswith("__init__.py"):
                continue
            # Convert path to module name: src/turnflow/_match/models.py -> turnflow._match.models
            module_name = module_path.replace("src/", "").replace("/", ".")[:-len(".py")]
            extensions.append(Extension(name=module_name, sources=[module_path]))
    return extensions


def get_ext_modules():
    """Get extension modules, cythonized when compilation is enabled."""
    if not USE_CYTHON:
        return []

    return cythonize(
        get_extensions(),
        compiler_directives={"language_level": "3"},
        nthreads=os.cpu_count() or 1,
    )


setup(
    name="turnflow",
    version="1.0.0",
    description="Client-side coordination core for hosted turn-based matches",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    ext_modules=get_ext_modules(),
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "cython>=3.0",
            "build",
            "wheel",
        ],
    },
    package_data={
        "turnflow": ["*.so", "*.pyd"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Cython",
    ],
)
