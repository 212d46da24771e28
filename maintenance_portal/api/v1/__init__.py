"""
Version 1 of the portal HTTP API.
"""
