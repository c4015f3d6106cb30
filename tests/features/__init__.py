"""
Behavioural tests for the sentiment analysis package.

This package contains:
- Golden sentence deterministic verification against the built-in dictionaries
- Dictionary generation round trips on synthetic corpora
"""
