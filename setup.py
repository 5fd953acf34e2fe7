from pathlib import Path

from setuptools import find_packages
from setuptools import setup


HERE = Path(__file__).resolve().parent


def get_long_description():
    readme = HERE / "README.md"
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="callspy",
    version="0.1.0",
    description="Record the calls made to members of objects, classes and modules, then restore them.",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    license="Apache 2",
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Framework :: Pytest",
    ],
    packages=find_packages(exclude=["tests*"]),
    package_data={
        "callspy": ["py.typed"],
    },
    zip_safe=False,
    python_requires=">=3.8",
    install_requires=[
        "envier~=0.6",
        "wrapt>=1.14",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
            "mock",
            "riot",
        ],
    },
    entry_points={
        "pytest11": [
            "callspy = callspy.contrib.pytest.plugin",
        ],
    },
)
