"""
add-n-commit

Interactive staging and AI-generated commit messages.
"""

__version__ = "1.0.0"
