"""
Clock tools for the Time Server.
"""
