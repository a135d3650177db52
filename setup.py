#!/usr/bin/env python

from setuptools import setup

kwargs = {'name': 'opendecay',
          'version': '0.1',
          'packages': ['opendecay'],
          'scripts': [],

          # Metadata
          'author': 'Colin Josey',
          'author_email': 'cjosey@mit.edu',
          'description': 'OpenDecay',
          'classifiers': [
              'Intended Audience :: Developers',
              'Intended Audience :: End Users/Desktop',
              'Intended Audience :: Science/Research',
              'License :: OSI Approved :: MIT License',
              'Natural Language :: English',
              'Programming Language :: Python',
              'Programming Language :: Python :: 3',
              'Topic :: Scientific/Engineering'
          ],

          # Required dependencies
          'python_requires': '>=3.6',
          'install_requires': ['numpy', 'scipy', 'tqdm'],
          'extras_require': {'test': ['pytest']}}

setup(**kwargs)
