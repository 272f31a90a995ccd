"""
Shared Utilities Module Initialization
"""
