"""CampusNet notification service package.

Ensures the local ``campusnet`` package takes precedence over similarly named
modules that might be installed in the environment.
"""
