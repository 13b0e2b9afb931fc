from setuptools import setup, find_packages

setup(
    name="kickstart",
    version="0.1.0",
    description="Scaffold new projects from template repositories",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "rich>=13.0.0",
        "click>=8.0",
        "requests>=2.25",
        "toml>=0.10",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pyfakefs>=5.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "kickstart=kickstart.__main__:main",
        ]
    },
  )
