"""
Menu API: public menu and admin dashboard backend.
"""
