"""
setup.py

kontent-rich-text-resolver - Kontent.ai rich text to Portable Text, HTML and Markdown
"""

from setuptools import find_packages, setup

from rich_text_resolver.__version__ import __version__
from setup_utils import load_requirements

setup(
    name="kontent-rich-text-resolver",
    description="Transforms Kontent.ai rich text HTML into Portable Text and renders it back out.",
    long_description=open("README.md", encoding="utf-8").read(),  # noqa: SIM115
    long_description_content_type="text/markdown",
    keywords="Kontent.ai rich-text portable-text HTML markdown parsing",
    python_requires=">=3.9.0",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Text Processing :: Markup :: HTML",
    ],
    packages=find_packages(include=["rich_text_resolver", "rich_text_resolver.*"]),
    version=__version__,
    install_requires=load_requirements(),
    extras_require={
        "test": load_requirements("requirements/test.in"),
    },
    entry_points={
        "console_scripts": ["rich-text-resolver=rich_text_resolver.cli:main"],
    },
    package_dir={"rich_text_resolver": "rich_text_resolver"},
    package_data={"rich_text_resolver": ["py.typed"]},
)
