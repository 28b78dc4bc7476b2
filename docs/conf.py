# Copyright 2023, QC Design GmbH and the chpsim contributors
# SPDX-License-Identifier: Apache-2.0
# Configuration file for the Sphinx documentation builder.
#
# For a full list of options see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Path setup --------------------------------------------------------------

import pathlib
import sys

sys.path.insert(0, str(pathlib.Path(__file__).absolute().parent.parent / "src"))


# -- Project information -----------------------------------------------------

project = "chpsim"
copyright = "2023, QC Design GmbH"
author = "QC Design GmbH"


# -- General configuration ---------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.intersphinx",
    "sphinx.ext.mathjax",
    "sphinx.ext.napoleon",
    "sphinx.ext.todo",
    "sphinx.ext.viewcode",
    "sphinxcontrib.bibtex",
]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "jsonschema": ("https://python-jsonschema.readthedocs.io/en/stable/", None),
}

autodoc_member_order = "groupwise"

# -- BiBTeX configuration --------------------------------------

import pybtex
from pybtex.style import template as bibtpl
from pybtex.style.formatting.alpha import Style


class ChpsimStyle(Style):
    """Bibliography style which links the arXiv eprint and DOI of each entry."""

    def format_web_refs(self, e):
        # based on urlbst output.web.refs, without the "visited on" date
        return bibtpl.sentence[
            bibtpl.optional[self.format_url(e)],
            bibtpl.optional[self.format_eprint(e)],
            bibtpl.optional[self.format_doi(e)],
        ]


pybtex.plugin.register_plugin("pybtex.style.formatting", "chpsim", ChpsimStyle)

bibtex_default_style = "chpsim"
bibtex_bibfiles = ["references.bib"]

exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]


# -- Options for HTML output -------------------------------------------------

html_theme = "furo"

nitpicky = True
nitpick_ignore_regex = [
    ("py:class", r"(enum|numpy)\..*"),
]

autodoc_default_options = {
    "members": True,
    "undoc-members": None,
    "special-members": True,
    "show-inheritance": None,
    # __init__ is documented with ".. automethod:: __init__" in the class docstring
    "exclude-members": (
        "__annotations__,__dataclass_fields__,__dataclass_params__,__post_init__,"
        "__dict__,__hash__,__init__,__match_args__,__module__,__slots__,__weakref__"
    ),
}

todo_include_todos = True
