"""Infrastructure module.

Contains configuration and logging setup.
"""
