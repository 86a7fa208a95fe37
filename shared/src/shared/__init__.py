"""
Shared toolkit for Gardien services: test base class and reporter.
"""
