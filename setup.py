from __future__ import annotations

from setuptools import find_packages, setup  # type: ignore


setup(
    name="tessera",
    version="0.1.0",
    description="Single-authority ticket ownership registry with an HTTP service and client",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "httpx>=0.27",
        "python-json-logger>=3.1",
    ],
    extras_require={
        # fastapi.testclient needs httpx, already a runtime dependency.
        "test": [
            "pytest>=7",
        ],
    },
    entry_points={
        "console_scripts": [
            "tessera=tessera.__main__:main",
        ],
    },
)
