"""Setup configuration for photo-organizer package."""

from setuptools import find_packages, setup

# Read version from __version__.py
version = {}
with open("src/python/photo_organizer/__version__.py") as f:
    exec(f.read(), version)

# Read README
with open("README.md", encoding="utf-8") as f:
    long_description = f.read()

setup(
    name="photo-organizer",
    version=version["__version__"],
    description="Organize photos and videos into a dated tree without storing duplicates",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Photo Organizer Team",
    python_requires=">=3.9",
    package_dir={"": "src/python"},
    packages=find_packages(where="src/python", exclude=["tests", "tests.*"]),
    install_requires=[
        "pyyaml>=6.0.1",
        "pillow>=10.2.0",
        "exifread>=3.0.0",
        "click>=8.1.0",
        "sqlalchemy>=2.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.12.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "po=photo_organizer.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "Programming Language :: Python :: 3",
        "Topic :: Multimedia :: Graphics",
    ],
)
