"""
HR Desk - job posting and application tracking.

Tracks job postings and candidate applications, exposing role-gated
operations for HR staff and applicants.
"""

__app_name__ = "HR Desk"
__version__ = "0.1.0"
