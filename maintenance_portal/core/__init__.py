"""
Core infrastructure: exceptions, logging, middleware, security and the
complaint access rules.
"""
