"""Core functionality for agentctl.

This package contains platform probing, the install method catalog,
the install executor and the method selection session.
"""
