# -*- coding: utf-8 -*-
"""
LDNest
======

LDNest_ turns flattened JSON-LD_ and YAML-LD graphs into nested documents
for display.

.. _LDNest: http://github.com/ldnest/ldnest
.. _JSON-LD: http://json-ld.org/
"""

from setuptools import setup
import os

# get meta data
about = {}
with open(os.path.join(
        os.path.dirname(__file__), 'lib', 'ldnest', '__about__.py')) as fp:
    exec(fp.read(), about)

with open('README.rst') as fp:
    long_description = fp.read()

setup(
    name='LDNest',
    version=about['__version__'],
    description='Nesting of flattened JSON-LD and YAML-LD graphs',
    long_description=long_description,
    author='LDNest contributors',
    url='http://github.com/ldnest/ldnest',
    packages=['ldnest'],
    package_dir={'': 'lib'},
    license='BSD 3-Clause license',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Environment :: Web Environment',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Internet',
        'Topic :: Software Development :: Libraries',
    ],
    python_requires='>=3.8',
    install_requires=[
        'PyLD',
        'PyYAML',
    ],
    extras_require= {
        'requests': ['requests'],
        'aiohttp': ['aiohttp'],
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['ldnest=ldnest.cli:main'],
    }
)
