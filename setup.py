"""Package setup for readme_crawler."""

from setuptools import setup, find_packages

setup(
    name="readme-crawler",
    version="1.0.0",
    description="Recursive GitHub README crawler that collects one preview image per repository",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "beautifulsoup4>=4.12.0",
        "lxml>=5.0.0",
        "urllib3>=2.0.0",
        "markdown>=3.5",
    ],
    extras_require={
        "ui": [
            "tqdm>=4.66.0",
            "colorlog>=6.8.0",
        ],
        "test": [
            "pytest>=7.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "readme-crawler=readme_crawler.cli:main",
        ],
    },
)
