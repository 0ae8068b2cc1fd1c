"""
Business Navigator agents.
"""
