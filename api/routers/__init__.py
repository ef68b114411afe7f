"""
Routery API.
"""
