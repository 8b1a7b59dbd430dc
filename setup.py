#!/usr/bin/env python
"""Setup configuration for Resume Studio Server."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="resume-studio-server",
    version="0.1.0",
    description="Resume builder backend: templates, PDF/DOCX export, editor sessions and AI analysis",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["resume_studio", "resume_studio.*", "config"]),
    py_modules=["manage", "wsgi"],
    python_requires=">=3.9",
    install_requires=[
        "Flask>=3.0",
        "Flask-SQLAlchemy>=3.1",
        "Flask-Cors>=4.0",
        "Flask-Limiter>=3.5",
        "SQLAlchemy>=2.0",
        "redis>=5.0",
        "fakeredis[lua]>=2.20",
        "python-json-logger>=2.0",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "PyJWT>=2.8",
        "weasyprint>=60.0",
        "PyMuPDF>=1.23",
        "python-docx>=1.1",
        "MarkupSafe>=2.1",
        "langchain-core>=0.2",
        "langchain-google-genai>=1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Web Environment",
        "Framework :: Flask",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
