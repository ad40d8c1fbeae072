"""
todo-finder: collect single-line TODO comments from a source tree into CSV.
"""

__version__ = "0.1.0"
