"""
Qt widgets and windows.
"""
