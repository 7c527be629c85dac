"""
Core business logic modules for HR Desk.

Submodules:
- access: Caller context and role checks
- errors: Structured error taxonomy
- lifecycle: Application status and interview progress rules
- views: HR and applicant read views
"""
