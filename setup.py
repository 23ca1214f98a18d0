from setuptools import setup, find_packages

setup(
    name="viewtween",
    version="0.1.0",
    description="Smooth, fold-aware viewport scrolling for text surfaces",
    packages=find_packages(include=["viewtween", "viewtween.*"]),
    install_requires=[
        "prompt-toolkit",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "viewtween=viewtween.__main__:main",
        ],
    },
    python_requires=">=3.11",
)
