from setuptools import find_packages, setup

setup(
    name="eventlog",
    version="0.1.0",
    description="A personal command-line log of dated, categorized events",
    author="Araray Velho",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click",
        "toml",
        "rich",
        "python-dateutil"
    ],
    extras_require={
        "test": [
            "pytest"
        ]
    },
    entry_points={
        "console_scripts": [
            "eventlog=eventlog.cli:main"
        ]
    },
)
