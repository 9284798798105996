"""
Viewer/admin access control.

- PinGate: single shared-PIN check carried in an http-only cookie
"""
