import os
import re
from setuptools import setup

root_dir = os.path.dirname(os.path.abspath(__file__))

description = (
	"pyexons is a python module for extracting "
	"single and multi-piece intervals from a "
	"FASTA file in one streaming pass"
)

with open(os.path.join(root_dir, 'README.rst')) as fh:
	long_description = fh.read()

with open(os.path.join(root_dir, 'pyexons', '__init__.py')) as fh:
	version = re.search(r"__version__ = '(.+?)'", fh.read()).group(1)

setup(
	name = 'pyexons',
	version = version,
	description = description,
	long_description = long_description,
	long_description_content_type = 'text/x-rst',
	license = 'MIT',
	keywords = 'fasta exon interval subsequence bioinformatics',
	classifiers = [
			"Development Status :: 4 - Beta",
			"Intended Audience :: Science/Research",
			"Natural Language :: English",
			"License :: OSI Approved :: MIT License",
			"Programming Language :: Python :: 3",
			"Operating System :: OS Independent",
			"Topic :: Scientific/Engineering :: Bio-Informatics"
	],
	python_requires = '>=3.8',
	packages = ['pyexons'],
	py_modules = ["pyexonscli"],
	extras_require = {
		'test': ['pyfastx', 'pyfaidx']
	},
	entry_points = {
		'console_scripts': ['pyexons = pyexonscli:main']
	},
	test_suite = "tests"
)
