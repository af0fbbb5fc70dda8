"""
hypecommit: AI-written commit messages and hypedoc summaries from your git history.
"""

__version__ = "0.1.0"
