"""Search-based code intelligence.

Go-to-definition, find-references and hover for dozens of languages, built
on top of a code-search backend instead of a compiler or precise index.
"""

__version__ = "0.1.0"
