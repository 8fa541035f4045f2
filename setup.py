# -*- coding: utf-8 -*-
import os

from setuptools import find_packages, setup

VERSION = "0.1"

setup(
    name="django-lazyload",
    package_dir={"": "src"},
    packages=find_packages(where="src", exclude=["tests"]),
    version=VERSION,
    description="Lazy load images, iframes and embeds in Django-rendered HTML.",
    long_description=open(os.path.join(os.path.dirname(__file__), "README.md"), encoding="utf8").read(),
    long_description_content_type="text/markdown",
    install_requires=["Django>=3.2"],
    extras_require={
        "test": ["pytest"],
    },
    license="MIT",
    keywords=["django", "lazyload", "images", "iframe", "html"],
    classifiers=[
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Operating System :: OS Independent",
        "Framework :: Django",
        "Framework :: Django :: 3.2",
        "Framework :: Django :: 4.0",
        "Framework :: Django :: 4.1",
        "Framework :: Django :: 4.2",
    ],
)
