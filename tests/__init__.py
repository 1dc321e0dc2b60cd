"""
Checkout engine test suite.
"""
