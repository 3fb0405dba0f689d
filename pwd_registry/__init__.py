"""
PWD Registry API - records management for persons with disabilities.
"""
__version__ = "1.0.0"
