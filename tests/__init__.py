"""Test suite for the yaml-variables package.

This package contains unit and integration tests validating YAML
loading, map location resolution, environment contribution, build
step execution, and the command line.
"""
