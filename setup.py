from setuptools import setup, find_packages

setup(
    name="selena-ai",
    version="1.0.0",
    description="Python SDK and CLI for the Selena AI chat completion API",
    author="Selena AI",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "rich",
        "python-dotenv",
        "pwinput",
        "pyperclip",
        "prompt_toolkit",
        "requests"
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "selena=selena.main:main",
        ],
    },
    python_requires=">=3.8",
)
