# -*- coding: utf-8 -*-
#
# This file is part of Invenio.
# Copyright (C) 2015-2019 CERN.
#
# Invenio is free software; you can redistribute it and/or modify it
# under the terms of the MIT License; see LICENSE file for more details.

"""Invenio module for zero-downtime index migration behind an alias."""

import os

from setuptools import find_packages, setup

readme = open('README.rst').read()
history = open('CHANGES.rst').read()

tests_require = [
    "coverage>=4.4.1",
    "isort>=4.3.11",
    "mock>=2.0.0",
    "pydocstyle>=2.0.0",
    "pytest-cov>=2.5.1",
    "pytest-mock>=1.6.0",
    "pytest>=6",
]

invenio_search_version = '1.2.0'

extras_require = {
    'docs': [
        'Sphinx>=1.5.6',
    ],
    'tests': tests_require,
}

extras_require['all'] = []
for name, reqs in extras_require.items():
    if name[0] == ':':
        continue
    extras_require['all'].extend(reqs)

install_requires = [
    "click>=7.0",
    "elasticsearch>=7.0.0,<8.0.0",
    "Flask>=1.1.0",
    "invenio-search[elasticsearch7]>={}".format(invenio_search_version),
    "werkzeug>=0.15",
]

packages = find_packages(exclude=['tests', 'tests.*'])

# Get the version string. Cannot be done with import!
g = {}
with open(os.path.join('invenio_alias_migrator', 'version.py'), 'rt') as fp:
    exec(fp.read(), g)
    version = g['__version__']

setup(
    name='invenio-alias-migrator',
    version=version,
    description=__doc__,
    long_description=readme + '\n\n' + history,
    keywords='invenio search elasticsearch alias reindex',
    license='MIT',
    author='CERN',
    author_email='info@inveniosoftware.org',
    packages=packages,
    zip_safe=False,
    include_package_data=True,
    platforms='any',
    python_requires='>=3.6',
    entry_points={
        'invenio_base.api_apps': [
            'invenio_alias_migrator = invenio_alias_migrator:InvenioAliasMigrator',
        ],
        'invenio_base.apps': [
            'invenio_alias_migrator = invenio_alias_migrator:InvenioAliasMigrator',
        ],
    },
    extras_require=extras_require,
    install_requires=install_requires,
    tests_require=tests_require,
    classifiers=[
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Topic :: Internet :: WWW/HTTP :: Dynamic Content',
        'Topic :: Software Development :: Libraries :: Python Modules',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Development Status :: 3 - Alpha',
    ],
)
