"""
rfcgraph setup: rfcgraph draws the update/obsolete relations
between documents of the RFC index
"""

from setuptools import setup, find_packages
import glob
import os

REQS = [
    'funcparserlib',
    'pydot',
    'tabulate',
]

TEST_REQS = [
    'pytest',
]


setup(name='rfcgraph',
      version='0.1',
      packages=find_packages(include=['rfcgraph', 'rfcgraph.*']),
      scripts=[f for f in glob.glob('scripts/*') if not os.path.isdir(f)],
      install_requires=REQS,
      extras_require={'test': TEST_REQS})
