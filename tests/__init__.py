"""
Test suite for the formquill package.
"""
