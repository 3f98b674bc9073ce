# -*- coding: utf-8 -*-

# system imports
from setuptools import setup, find_packages  # type: ignore


# proceed with actual install
install_requires = [
    "click>=8.0.0",
    "packaging",
]

test_requires = [
    "pytest",
    "pytest-benchmark",
    "pytest-cov",
]

dev_requires = [
    "black",
    "flake8",
    "mypy",
    "pre-commit",
] + test_requires

setup(
    name="recency",
    version="1.0.0",
    description="Fixed capacity, thread-safe least recently used caches.",
    license="MIT",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=find_packages("src"),
    package_dir={"": "src"},
    package_data={
        "recency": ["py.typed"],
    },
    install_requires=install_requires,
    extras_require={
        "test": test_requires,
        "dev": dev_requires,
    },
    zip_safe=False,
    entry_points={
        "console_scripts": ["recency=recency.cli:main"],
    },
    python_requires=">=3.8",
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Operating System :: Unix",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
    ],
)
