"""
nafkit setup: nafkit is a library for building, navigating and
querying documents in the KAF/NAF linguistic annotation format
"""

from setuptools import setup, find_packages
import glob
import os

REQS = [
    'funcparserlib',
    'pydot',
    'frozendict',
    'tabulate',
    'nltk >= 3.0.0',
]


setup(name='nafkit',
      version='0.1',
      author='Eric Kow',
      author_email='eric@erickow.com',
      packages=find_packages(),
      scripts=[f for f in glob.glob('scripts/*') if not os.path.isdir(f)],
      install_requires=REQS,
      extras_require={'test': ['pytest']})
