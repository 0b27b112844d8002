#!/usr/bin/python3
# -*- coding: utf-8 -*-

from setuptools import setup, find_packages
import os

ROOT = os.path.abspath(os.path.dirname(__file__))

with open(os.path.join(ROOT, 'README.md'), 'r', encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='pytwophase',
    include_package_data=True,
    version='1.0.0',
    packages=find_packages(exclude=['*.tests']),
    description='pytwophase - Two-phase flow regime and hydraulics for pipe segments',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='pytwophase contributors',
    keywords=['two-phase', 'flow regime', 'pipeline', 'hydraulics'],
    classifiers=[],
    python_requires='>=3.8',
    install_requires=[
        'numpy',
        'pandas',
        'tabulate',
    ],
    extras_require={
        'test': ['pytest', 'scipy'],
    }
)
