from setuptools import find_packages, setup

setup(
    name="dirmonitor",
    version="0.1.0",
    description="A polling directory monitor reporting created, updated and deleted files",
    author="Araray Velho",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "click",
        "toml",
        "pyyaml",
        "rich",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "dirmonitor=dirmonitor.cli:main"
        ]
    },
)
