#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os

from setuptools import setup

readme = open('README.rst').read()
version = (0, 3, 0)

def package_files(directory):
    paths = []
    for (path, directories, filenames) in os.walk(directory):
        for filename in filenames:
            paths.append(os.path.join('..', path, filename))
    return paths

extra_files = package_files('sforzando/data')

setup(
    name='sforzando',
    python_requires=">=3.10",
    version=".".join(map(str, version)),
    description='Dynamic markings for music engraving: playback velocity and placement',
    long_description=readme,
    author='Eduardo Moguillansky',
    author_email='eduardo.moguillansky@gmail.com',
    packages=[
        'sforzando',
    ],
    install_requires=[
        "quicktions",
        "pyyaml",
        "thefuzz",

        # Own libraries
        "emlib>=1.14.1",
        "configdict>=2.10.0",
    ],
    extras_require={
        'test': ['pytest'],
    },
    license="LGPLv2",
    zip_safe=False,
    classifiers=[
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Multimedia :: Sound/Audio'
    ],
    include_package_data=True,
    package_data={'sforzando': extra_files},
)
