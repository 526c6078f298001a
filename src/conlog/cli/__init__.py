"""
Command line interface for conlog.
"""
