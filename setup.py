"""
Setup file.
"""

import os

from setuptools import find_packages, setup

URL = "https://github.com/tscompile/tscompile"
KEYWORDS = "typescript tsc compiler subprocess javascript sourcemap"
HERE = os.path.dirname(os.path.abspath(__file__))


def read_version() -> str:
    with open(os.path.join(HERE, "src", "tscompile", "__init__.py"), encoding="utf-8") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=", 1)[1].strip().strip('"')
    raise RuntimeError("Unable to find __version__")


if __name__ == "__main__":
    setup(
        name="tscompile",
        version=read_version(),
        description="Run the TypeScript command-line compiler from Python",
        keywords=KEYWORDS,
        url=URL,
        python_requires=">=3.9",
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        install_requires=["psutil"],
        extras_require={"test": ["pytest"]},
        entry_points={"console_scripts": ["tscompile=tscompile.cli:main"]},
        include_package_data=True)
