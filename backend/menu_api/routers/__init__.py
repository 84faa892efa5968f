"""
HTTP routers for the menu API.
"""
