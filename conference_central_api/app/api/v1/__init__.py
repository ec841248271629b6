"""
Version 1 of the API.

This subpackage bundles the profile and conference endpoints for the
first public version of the Conference Central API.
"""
