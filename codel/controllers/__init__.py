"""
Controllers Package

HTTP endpoints, one blueprint per area.
"""
