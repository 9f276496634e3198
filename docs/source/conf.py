import os
import sys
sys.path.insert(0, os.path.abspath('../../src'))

project = 'libdupes'
copyright = '2026, libdupes contributors'
author = 'libdupes contributors'
release = '0.3.0'

extensions = [
    'sphinx.ext.autodoc',
    'sphinx.ext.napoleon',
    'sphinx.ext.viewcode',
    'sphinx_rtd_theme',
]

templates_path = ['_templates']
exclude_patterns = []

html_theme = 'sphinx_rtd_theme'
html_static_path = ['_static']

autodoc_member_order = 'bysource'
