from setuptools import find_packages, setup


setup(
    name="diary-graph-view",
    version="0.1.0",
    description="Diary entry graph view: clustering, force layout, camera and drill-down navigation service",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "pydantic>=2.0.0",
        "fastapi>=0.100.0",
        "uvicorn>=0.23.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "httpx>=0.24.0",
        ],
    },
)
