from setuptools import setup, find_packages

setup(
    name="subscription-savings",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"subscription_savings": ["data/*.json"]},
    install_requires=[
        "pydantic>=2.0.0",
        "numpy>=1.24.0",
        "rapidfuzz>=3.0.0",
    ],
    extras_require={
        "dev": [
            "mypy>=1.0.0",
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "isort>=5.0.0",
            "flake8>=6.0.0"
        ]
    },
    python_requires=">=3.9",
)
