"""todo-console - Terminal client for a TODO REST backend."""
from setuptools import setup, find_packages

setup(
    name="todo-console",
    version="1.0.0",
    description="Terminal client that keeps a TODO list in sync with a REST backend",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.1.0",
        "rich>=13.0.0",
        "questionary>=2.0.0",
        "requests>=2.31.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "todo-console=todo_console.cli:main",
            "tdc=todo_console.cli:main",  # Short alias
        ],
    },
    python_requires=">=3.10",
)
