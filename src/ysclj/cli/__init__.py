"""
Command line interface for ysclj.
"""
