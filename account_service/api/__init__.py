"""
HTTP routers for the account service.
"""
