# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

# -- Project information -----------------------------------------------------

project = "taiclock"
copyright = "2025"

# -- General configuration ---------------------------------------------------

extensions = [
    "myst_parser",  # Markdown pages
    "sphinx.ext.napoleon",  # Numpy style docstrings
    "autoapi.extension",  # API pages from the package source
]

autoapi_type = "python"
autoapi_dirs = ["../../taiclock"]
autoapi_ignore = ["*/data/*"]

root_doc = "index"
exclude_patterns = []

source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"
html_title = "taiclock"
