"""Setup file for GroceryGo package."""
from setuptools import setup, find_packages

setup(
    name="grocerygo",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "SQLAlchemy>=2.0",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "python-dotenv>=1.0",
        "loguru>=0.7",
    ],
    extras_require={
        "test": [
            "pytest>=8.1.1",
            "pytest-asyncio>=0.23",
        ],
    },
    python_requires=">=3.11",
)
