#!/usr/bin/env python

from setuptools import setup, find_namespace_packages

setup(
    name="formwire",
    version="0.1.0",
    description="HTML form data set encoders (multipart/form-data, urlencoded, text/plain)",
    author="Proton Technologies",
    author_email="contact@protonmail.com",
    install_requires=[],
    extras_require={
        "test": ["pytest", "pytest-cov", "flake8"]
    },
    entry_points={
        "formwire_loader_encoder": [
            "multipart = formwire.encoders.multipart:MultipartEncoder",
            "urlencoded = formwire.encoders.urlencoded:UrlEncodedEncoder",
            "plaintext = formwire.encoders.plaintext:PlaintextEncoder",
        ],
    },
    packages=find_namespace_packages(include=['formwire', 'formwire.*']),
    include_package_data=True,
    python_requires=">=3.8",
    license="GPLv3",
    platforms="OS Independent",
    classifiers=[
        "Intended Audience :: Developers",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python",
        "Topic :: Internet :: WWW/HTTP",
    ]
)
